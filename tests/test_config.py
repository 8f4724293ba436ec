"""
Unit tests for config.py
"""
import json

import pytest

from remotedu.config import Config, load_config
from remotedu.errors import ConfigError, NoCredentialsError


def _write(tmp_path, data, name="config.json"):
    path = tmp_path / name
    path.write_text(data if isinstance(data, str) else json.dumps(data))
    return path


def test_load_config(tmp_path):
    """Test loading a complete config."""
    path = _write(tmp_path, {
        "endpoint": "https://dir.example.com/",
        "username": "ann@example.com",
        "token": "secret",
        "timeout": 30,
    })
    
    config = load_config(path)
    
    assert config.endpoint == "https://dir.example.com"
    assert config.username == "ann@example.com"
    assert config.token == "secret"
    assert config.timeout == 30
    assert config.has_credentials


def test_load_config_token_file(tmp_path):
    """Test the token is read from tokenfile when not given inline."""
    token_file = tmp_path / "token"
    token_file.write_text("from-file\n")
    path = _write(tmp_path, {"endpoint": "http://dir.example.com", "tokenfile": str(token_file)})
    
    config = load_config(path)
    
    assert config.token == "from-file"
    assert config.timeout is None


def test_no_credentials_carries_config(tmp_path):
    """Test a config without credentials is reported but still usable."""
    path = _write(tmp_path, {"endpoint": "http://dir.example.com"})
    
    with pytest.raises(NoCredentialsError) as excinfo:
        load_config(path)
    
    assert isinstance(excinfo.value, ConfigError)
    assert isinstance(excinfo.value.config, Config)
    assert excinfo.value.config.endpoint == "http://dir.example.com"
    assert not excinfo.value.config.has_credentials


def test_missing_token_file_means_no_credentials(tmp_path):
    path = _write(tmp_path, {
        "endpoint": "http://dir.example.com",
        "tokenfile": str(tmp_path / "absent"),
    })
    
    with pytest.raises(NoCredentialsError):
        load_config(path)


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="config file not found") as excinfo:
        load_config(tmp_path / "nope.json")
    
    assert not isinstance(excinfo.value, NoCredentialsError)


def test_invalid_json(tmp_path):
    path = _write(tmp_path, "{not json")
    
    with pytest.raises(ConfigError, match="invalid JSON"):
        load_config(path)


@pytest.mark.parametrize("data,message", [
    ([], "JSON object"),
    ({}, "'endpoint' is required"),
    ({"endpoint": "ftp://dir.example.com"}, "http"),
    ({"endpoint": "http://d", "username": 7}, "'username'"),
    ({"endpoint": "http://d", "timeout": 0}, "'timeout'"),
    ({"endpoint": "http://d", "timeout": "slow"}, "'timeout'"),
    ({"endpoint": "http://d", "timeout": True}, "'timeout'"),
    ({"endpoint": "http://d", "token": 12}, "'token'"),
    ({"endpoint": "http://d", "tokenfile": 5}, "'tokenfile'"),
])
def test_invalid_fields(tmp_path, data, message):
    """Test each malformed field is a configuration error."""
    path = _write(tmp_path, data)
    
    with pytest.raises(ConfigError, match=message) as excinfo:
        load_config(path)
    
    assert not isinstance(excinfo.value, NoCredentialsError)
