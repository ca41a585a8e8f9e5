USER = "wallet_1"


def _record(client, metric_type, value, notes=None, caller=USER, timestamp=1):
    return client.post(
        "/metrics/",
        json={"metric_type": metric_type, "value": value, "timestamp": timestamp, "notes": notes},
        headers={"X-Caller-Id": caller},
    )


def test_healthcheck(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_metric_types(client):
    response = client.get("/metrics/types")
    assert response.status_code == 200
    assert {"code": 1, "name": "PULSE"} in response.json()


def test_record_and_read_latest(client):
    response = _record(client, 1, 75, "Morning reading")
    assert response.status_code == 200
    assert response.json() == {"ok": True}

    response = client.get(f"/metrics/{USER}/1")
    assert response.status_code == 200
    assert response.json() == {"measurement": {"value": 75, "notes": "Morning reading"}}


def test_invalid_metric_type_returns_code_101(client):
    response = _record(client, 99, 75)
    assert response.status_code == 422
    assert response.json()["code"] == 101

    response = client.get(f"/metrics/{USER}/99")
    assert response.json() == {"measurement": None}


def test_overwrite_returns_latest_value(client):
    _record(client, 1, 75)
    _record(client, 1, 80)

    response = client.get(f"/metrics/{USER}/1")
    assert response.json()["measurement"]["value"] == 80


def test_unknown_owner_reads_null(client):
    response = client.get("/metrics/unknown-user/1")
    assert response.status_code == 200
    assert response.json() == {"measurement": None}


def test_owner_comes_from_caller_header(client):
    _record(client, 1, 75, caller="wallet_2")

    assert client.get(f"/metrics/{USER}/1").json() == {"measurement": None}
    assert client.get("/metrics/wallet_2/1").json()["measurement"]["value"] == 75


def test_missing_caller_header_rejected(client):
    response = client.post("/metrics/", json={"metric_type": 1, "value": 75, "timestamp": 1})
    assert response.status_code == 422
    assert "code" not in response.json()


def test_negative_value_rejected_by_request_validation(client):
    response = _record(client, 1, -5)
    assert response.status_code == 422
    assert "code" not in response.json()


def test_owner_with_slash_reads_back(client):
    assert _record(client, 1, 75, "Morning reading", caller="clinic/alice").status_code == 200

    expected = {"measurement": {"value": 75, "notes": "Morning reading"}}
    assert client.get("/metrics/clinic/alice/1").json() == expected
    assert client.get("/metrics/clinic%2Falice/1").json() == expected


def test_value_beyond_64_bits_accepted(client):
    assert _record(client, 4, 2**100).status_code == 200

    assert client.get(f"/metrics/{USER}/4").json()["measurement"]["value"] == 2**100
