import pytest

from bacanno.pipeline import datadict as dd


def test_getters_fall_back_to_defaults():
    config = {}
    assert dd.get_conda_cmd(config) == "conda"
    assert dd.get_required_memory(config) == 16
    assert dd.get_download_timeout(config) == 300


def test_getter_reads_nested_value():
    config = {"resources": {"hmmer": {"pfam_db": "/db/Pfam-A.hmm"}}}
    assert dd.get_pfam_db(config) == "/db/Pfam-A.hmm"


def test_always_list_wraps_single_values():
    assert dd.get_conda_channels({"conda": {"channels": "bioconda"}}) == ["bioconda"]


def test_get_environment_lists_available_on_error():
    config = {"environments": {"barrnap": {"name": "env_barrnap"}}}
    assert dd.get_environment(config, "barrnap")["name"] == "env_barrnap"
    with pytest.raises(ValueError) as excinfo:
        dd.get_environment(config, "prokka")
    assert "barrnap" in str(excinfo.value)
