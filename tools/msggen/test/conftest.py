"""Shared fixtures for msggen tests."""

import pytest
import sys
import os

# Add the project root to sys.path so 'tools.msggen' is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", ".."))

from tools.msggen.schema import parse_schema_yaml


AUTH_YAML = """\
port_name: auth
proto_headers:
  - wallet.pb.h
  - mfgtest.pb.h
messages:
  structs:
    - name: auth_start_cmd_t
      fields:
        - uint32_t id
        - uint8_t nonce[16];
    - name: AuthResultMsg
      suffix: Msg
      fields:
        - int32_t status
  protos:
    - name: fwpb_start_fingerprint_enrollment_cmd
    - fwpb_get_fingerprint_enrollment_status_cmd
    - name: fwpb_wipe_state_cmd
      namespace: fwpb
      short_name: wipe
"""


EMPTY_YAML = """\
port_name: svc
"""


@pytest.fixture
def auth_yaml():
    """Auth port schema YAML string."""
    return AUTH_YAML


@pytest.fixture
def auth_schema():
    """Parsed auth port schema."""
    return parse_schema_yaml(AUTH_YAML)


@pytest.fixture
def empty_schema():
    """Schema with no structs and no protos."""
    return parse_schema_yaml(EMPTY_YAML)
