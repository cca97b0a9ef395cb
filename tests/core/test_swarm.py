"""Tests for swarm discovery validation."""

import pytest

from machineflags.core.swarm import ValidationError, validate_swarm_discovery


class TestValidateSwarmDiscovery:
    """Tests for validate_swarm_discovery."""

    def test_accepts_empty_string(self):
        """Empty discovery is optional and valid."""
        validate_swarm_discovery("")

    def test_accepts_token(self):
        """token:// references are valid."""
        validate_swarm_discovery("token://deadbeefcafe")

    def test_errors_given_invalid_url(self):
        """Strings without a scheme are rejected."""
        with pytest.raises(ValidationError):
            validate_swarm_discovery("foo")

    def test_error_names_input(self):
        """The error message names the offending input."""
        with pytest.raises(ValidationError, match="foo"):
            validate_swarm_discovery("foo")

    @pytest.mark.parametrize("discovery", [
        "consul://10.0.0.5:8500/swarm",
        "etcd://etcd1.example.com:2379/path",
        "zk://zk1:2181,zk2:2181/swarm",
        "file:///etc/swarm/cluster",
        "nodes://10.0.0.1:2375,10.0.0.2:2375",
        "custom+backend://anything",
    ])
    def test_accepts_backends(self, discovery):
        """Known and pluggable backends with the right shape are valid."""
        validate_swarm_discovery(discovery)

    @pytest.mark.parametrize("discovery", [
        "token://",
        "token://abc/def",
        "://missing-scheme",
        "1http://bad-scheme",
        "token:deadbeef",
        "consul:///no-host",
        "file://",
        "nodes://,",
        "token://abc\n",
        "token://abc def",
        " token://abc",
        "consul://10.0.0.5:8500/swarm\t",
    ])
    def test_rejects_malformed(self, discovery):
        """Malformed references raise ValidationError."""
        with pytest.raises(ValidationError):
            validate_swarm_discovery(discovery)
