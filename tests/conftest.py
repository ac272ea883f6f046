"""
Pytest configuration and fixtures for cardapdu tests.

This module provides shared descriptors, a mock transport collaborator
and logging isolation for the encoder tests.
"""

import logging
from unittest.mock import Mock

import pytest

from cardapdu.models import CommandDescriptor


# ============================================================================
# Command Descriptors
# ============================================================================

@pytest.fixture
def select_header():
    """
    SELECT by DF name header as a plain mapping.

    Returns:
        dict: cla/ins/p1/p2 of SELECT (00 A4 04 00)
    """
    return {"cla": 0x00, "ins": 0xA4, "p1": 0x04, "p2": 0x00}


@pytest.fixture
def sample_aid():
    """
    Sample AID (Application Identifier) for testing.

    Returns:
        list: A 7-byte payment application AID
    """
    return [0xA0, 0x00, 0x00, 0x00, 0x04, 0x10, 0x10]


@pytest.fixture
def select_descriptor(sample_aid):
    """
    Case 4 SELECT descriptor with the sample AID.

    Returns:
        CommandDescriptor: SELECT by AID requesting FCI
    """
    return CommandDescriptor(cla=0x00, ins=0xA4, p1=0x04, p2=0x00, data=sample_aid, le=0x00)


# ============================================================================
# Transport Collaborator
# ============================================================================

@pytest.fixture
def mock_transport():
    """
    Mock card reader transport accepting encoded command bytes.

    Returns:
        Mock: transport with transmit() answering SW=9000
    """
    transport = Mock()
    transport.transmit = Mock(return_value=(b"", 0x90, 0x00))
    return transport


# ============================================================================
# Logging Isolation
# ============================================================================

@pytest.fixture
def clean_cardapdu_logger():
    """
    Restore the cardapdu logger after a test touches its handlers.
    """
    root = logging.getLogger("cardapdu")
    handlers = list(root.handlers)
    level = root.level
    propagate = root.propagate
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    root.propagate = propagate
