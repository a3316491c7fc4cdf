from __future__ import annotations

import json
import sqlite3
import sys

import pytest

import guidance_cli
from build_cases_db import build_database


@pytest.fixture
def db_path(tmp_path):
    tsv = tmp_path / "cases.tsv"
    tsv.write_text(
        "case_id\ttitle\tyear\tcategory\tkey_holding\tpractical_takeaway\n"
        "case_002\tArnesh Kumar v. State of Bihar\t2014\tFalse Arrest\t"
        "Police must record reasons before arrest.\tAsk for written reasons.\n"
        "case_006\tSatender Kumar Antil v. CBI\t2022\tBail\t"
        "Bail is the rule.\tApply for regular bail.\n",
        encoding="utf-8",
    )
    path = tmp_path / "legal_cases.db"
    build_database(path, tsv_path=tsv)
    return path


def test_ask_prints_answer(db_path, monkeypatch, capsys):
    monkeypatch.setattr(
        sys, "argv",
        ["guidance_cli.py", "--db", str(db_path), "ask", "Police arrested me without showing warrant"],
    )
    guidance_cli.main()
    data = json.loads(capsys.readouterr().out)
    assert data["intent"] == "arrest"
    assert data["sources"][0]["title"] == "Arnesh Kumar v. State of Bihar"


def test_ask_gate_outcome(db_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["guidance_cli.py", "--db", str(db_path), "ask", "bail"])
    guidance_cli.main()
    assert json.loads(capsys.readouterr().out)["needsClarification"] is True


def test_health_reports_counts(db_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["guidance_cli.py", "--db", str(db_path), "health"])
    guidance_cli.main()
    data = json.loads(capsys.readouterr().out)
    assert data["status"] == "ok"
    assert data["cases"] == 2
    assert data["categories"] == {"False Arrest": 1, "Bail": 1}


def test_health_missing_store_exits(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(
        sys, "argv", ["guidance_cli.py", "--db", str(tmp_path / "missing.db"), "health"]
    )
    with pytest.raises(SystemExit) as exc:
        guidance_cli.main()
    assert exc.value.code == 1
    assert json.loads(capsys.readouterr().out)["database"] == "disconnected"


def test_no_command_prints_help(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["guidance_cli.py"])
    with pytest.raises(SystemExit) as exc:
        guidance_cli.main()
    assert exc.value.code == 2
    assert "ask" in capsys.readouterr().out


def test_ask_malformed_store_prints_error(db_path, monkeypatch, capsys):
    conn = sqlite3.connect(db_path)
    with conn:
        conn.execute(
            "INSERT INTO cases (id, title, category, keywords) VALUES (NULL, 'Orphan', 'False Arrest', 'police')"
        )
    conn.close()
    monkeypatch.setattr(
        sys, "argv",
        ["guidance_cli.py", "--db", str(db_path), "ask", "Police arrested me without showing warrant"],
    )
    with pytest.raises(SystemExit) as exc:
        guidance_cli.main()
    assert exc.value.code == 1
    assert json.loads(capsys.readouterr().out)["error"] == "Internal server error"
