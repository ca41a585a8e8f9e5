from backend.models.measurement import LatestMeasurement
from backend.store import DuckDBMetricStore
from scripts.import_readings import main


def test_import_script_writes_duckdb(tmp_path, capsys):
    csv_path = tmp_path / "readings.csv"
    csv_path.write_text(
        "owner,metric_type,value,timestamp,notes\n"
        "alice,1,75,10,Morning reading\n"
        "alice,99,75,11,\n",
        encoding="utf-8",
    )
    db_path = tmp_path / "out" / "metrics.duckdb"

    exit_code = main([str(csv_path), "--db", str(db_path)])

    assert exit_code == 1
    assert "Accepted: 1" in capsys.readouterr().out
    store = DuckDBMetricStore(db_path)
    try:
        assert store.get_latest_measurement("alice", 1) == LatestMeasurement(value=75, notes="Morning reading")
    finally:
        store.close()
