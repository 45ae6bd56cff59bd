import os

import pytest

from bacanno.provenance import profile


def test_report_appends_rows_under_one_header(tmp_path):
    for label in ["Part 1", "Part 2"]:
        with profile.report(label, str(tmp_path)):
            pass
    with open(os.path.join(str(tmp_path), profile.METRICS_FILE)) as in_handle:
        rows = [l.rstrip("\n").split("\t") for l in in_handle]
    assert rows[0] == profile.METRICS_HEADER
    assert [r[0] for r in rows[1:]] == ["Part 1", "Part 2"]
    assert float(rows[1][3]) >= 0


def test_failed_stage_is_not_recorded(tmp_path):
    with pytest.raises(RuntimeError):
        with profile.report("Part 1", str(tmp_path)):
            raise RuntimeError("tool failed")
    assert not os.path.exists(os.path.join(str(tmp_path), profile.METRICS_FILE))


def test_report_logs_start_and_completion(mocker):
    info = mocker.patch("bacanno.provenance.profile.logger.info")
    with profile.report("Part 2: Barrnap"):
        pass
    messages = [c[0][0] for c in info.call_args_list]
    assert messages[0] == "Starting Part 2: Barrnap"
    assert messages[1].startswith("Completed Part 2: Barrnap in ")
