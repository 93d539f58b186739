import pytest
import yaml

from models.policy import SequencingPolicy
from utils.config_loader import (
    DEFAULT_CONFIG,
    load_config,
    load_policy_from_config,
    merge_config,
    save_config,
)


def test_default_config_loads():
    config = load_config()

    assert isinstance(config['policy'], SequencingPolicy)
    assert config['policy'].reject_duplicate_ids is False
    assert config['policy'].log_level == 'INFO'


def test_yaml_overrides_are_merged_over_defaults(tmp_path):
    path = tmp_path / 'policy.yaml'
    path.write_text('sequencing:\n  reject_duplicate_ids: true\n')

    config = load_config(str(path))

    assert config['policy'].reject_duplicate_ids is True
    assert config['policy'].log_level == 'INFO'
    assert config['raw_config']['logging']['format'] == DEFAULT_CONFIG['logging']['format']


def test_json_config(tmp_path):
    path = tmp_path / 'policy.json'
    path.write_text('{"logging": {"level": "warning"}}')

    assert load_config(str(path))['policy'].log_level == 'WARNING'


def test_empty_yaml_uses_defaults(tmp_path):
    path = tmp_path / 'empty.yaml'
    path.write_text('')

    assert load_config(str(path))['policy'] == SequencingPolicy()


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / 'env.yaml'
    path.write_text('sequencing:\n  reject_duplicate_ids: true\n')
    monkeypatch.setenv('JOB_SEQUENCER_CONFIG', str(path))

    assert load_config()['policy'].reject_duplicate_ids is True


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv('JOB_SEQUENCER_LOG_LEVEL', 'debug')

    assert load_config()['policy'].log_level == 'DEBUG'


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / 'nope.yaml'))


def test_invalid_values_name_the_file(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text('logging:\n  level: LOUD\n')

    with pytest.raises(ValueError, match='bad.yaml'):
        load_config(str(path))


def test_non_mapping_config_is_rejected(tmp_path):
    path = tmp_path / 'list.yaml'
    path.write_text('- 1\n- 2\n')

    with pytest.raises(ValueError, match='mapping'):
        load_config(str(path))


def test_merge_config_does_not_modify_inputs():
    defaults = {'a': {'b': 1, 'c': 2}}
    overrides = {'a': {'c': 3}, 'd': 4}

    merged = merge_config(defaults, overrides)

    assert merged == {'a': {'b': 1, 'c': 3}, 'd': 4}
    assert defaults == {'a': {'b': 1, 'c': 2}}


def test_save_config_round_trip(tmp_path):
    policy = SequencingPolicy(reject_duplicate_ids=True, log_level='ERROR')
    path = tmp_path / 'saved.yaml'

    save_config(policy, str(path))

    assert yaml.safe_load(path.read_text())['sequencing']['reject_duplicate_ids'] is True
    assert load_policy_from_config(yaml.safe_load(path.read_text())) == policy


def test_empty_section_with_log_level_override(tmp_path, monkeypatch):
    path = tmp_path / 'policy.yaml'
    path.write_text('logging:\n')
    monkeypatch.setenv('JOB_SEQUENCER_LOG_LEVEL', 'debug')

    policy = load_config(str(path))['policy']

    assert policy.log_level == 'DEBUG'
    assert policy.log_format == SequencingPolicy().log_format


def test_non_mapping_section_is_rejected(tmp_path):
    path = tmp_path / 'policy.yaml'
    path.write_text('logging: loud\n')

    with pytest.raises(ValueError, match="section 'logging'"):
        load_config(str(path))
