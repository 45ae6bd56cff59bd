import pytest
import yaml

from bacanno.pipeline import config_utils
from bacanno.pipeline import datadict as dd


def test_default_configuration_defines_all_stage_environments():
    config, config_file = config_utils.load_system_config()
    assert config_file == config_utils.DEFAULT_CONFIG
    assert sorted(config["environments"]) == ["barrnap", "gemoma_hmmer", "glimmer_eggnog",
                                              "prodigal_prokka"]
    assert dd.get_conda_channels(config) == ["bioconda", "conda-forge"]


def test_user_configuration_is_merged_over_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("PFAM_DIR", "/data/pfam")
    user = tmp_path / "custom.yaml"
    user.write_text(yaml.safe_dump({"resources": {"hmmer": {"pfam_db": "$PFAM_DIR/Pfam-A.hmm"},
                                                  "machine": {"memory": 8}}}))
    config, config_file = config_utils.load_system_config(str(user))
    assert config_file == str(user)
    assert dd.get_pfam_db(config) == "/data/pfam/Pfam-A.hmm"
    assert dd.get_required_memory(config) == 8
    assert dd.get_required_disk(config) == 50
    assert "prodigal_prokka" in dd.get_environments(config)


def test_missing_user_configuration_raises(tmp_path):
    with pytest.raises(ValueError):
        config_utils.load_system_config(str(tmp_path / "missing.yaml"))

