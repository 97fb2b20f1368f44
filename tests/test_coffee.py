from datetime import datetime, timedelta, timezone

from conftest import act_as


def utc_today():
    return datetime.now(timezone.utc).date()


def add(client, **payload):
    payload.setdefault("timezone", "UTC")
    r = client.post("/coffee", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def test_add_record(client, alice):
    record = add(client, cups=2, date="2024-03-05", timestamp="2024-03-05T07:30:00Z", coffeeType="latte")
    assert record["cups"] == 2
    assert record["date"] == "2024-03-05"
    assert record["coffeeType"] == "latte"
    assert record["userId"] == alice["id"]


def test_add_record_rejects_future_date(client, alice):
    future = (utc_today() + timedelta(days=2)).isoformat()
    r = client.post("/coffee", json={"cups": 1, "date": future, "timezone": "UTC"})
    assert r.status_code == 400
    assert r.json() == {"error": "Date cannot be in the future"}


def test_add_record_requires_positive_cups(client, alice):
    assert client.post("/coffee", json={"cups": 0}).status_code == 400
    assert client.post("/coffee", json={"cups": -1}).status_code == 400
    assert client.post("/coffee", json={"cups": "many"}).status_code == 400
    assert client.post("/coffee", json={"cups": 101}).status_code == 400
    assert client.post("/coffee", json={"cups": 10**30}).status_code == 400


def test_add_record_rejects_unknown_timezone(client, alice):
    r = client.post("/coffee", json={"cups": 1, "timezone": "Mars/Olympus"})
    assert r.status_code == 400


def test_timezone_area_names_are_rejected(client, alice):
    r = client.post("/coffee", json={"cups": 1, "timezone": "Asia"})
    assert r.status_code == 400
    assert r.json() == {"error": "Unknown timezone: Asia"}

    assert client.get("/coffee/stats", params={"timezone": "America"}).status_code == 400
    assert client.get("/coffee/today", params={"timezone": "Europe"}).status_code == 400


def test_records_are_additive_per_day(client, alice):
    add(client, cups=1, date="2024-03-05", timestamp="2024-03-05T07:00:00Z")
    add(client, cups=2, date="2024-03-05", timestamp="2024-03-05T13:00:00Z")

    records = client.get("/coffee", params={"month": "2024-03"}).json()
    assert len(records) == 2
    assert sum(record["cups"] for record in records) == 3


def test_list_by_month_and_recent(client, alice):
    add(client, cups=1, date="2024-02-29", timestamp="2024-02-29T09:00:00Z")
    add(client, cups=1, date="2024-03-01", timestamp="2024-03-01T09:00:00Z")
    add(client, cups=1, date="2024-03-31", timestamp="2024-03-31T09:00:00Z")

    march = client.get("/coffee", params={"month": "2024-03"}).json()
    assert [record["date"] for record in march] == ["2024-03-31", "2024-03-01"]

    recent = client.get("/coffee").json()
    assert [record["date"] for record in recent] == ["2024-03-31", "2024-03-01", "2024-02-29"]

    assert client.get("/coffee", params={"month": "2024-13"}).status_code == 400
    assert client.get("/coffee", params={"month": "March"}).status_code == 400
    assert client.get("/coffee", params={"month": "0000-01"}).status_code == 400


def test_list_returns_only_own_records(client, alice, bob):
    add(client, cups=1, date="2024-03-01", timestamp="2024-03-01T09:00:00Z")

    act_as(client, bob["email"])
    assert client.get("/coffee").json() == []


def test_delete_foreign_or_missing_record_is_not_found(client, alice, bob):
    record = add(client, cups=1, date="2024-03-01", timestamp="2024-03-01T09:00:00Z")

    act_as(client, bob["email"])
    foreign = client.delete(f"/coffee/{record['id']}")
    missing = client.delete("/coffee/999999")
    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json()

    act_as(client, alice["email"])
    assert client.delete(f"/coffee/{record['id']}").status_code == 200
    assert client.get("/coffee").json() == []


def test_stats_group_by_date_and_hour_separately(client, alice):
    yesterday = utc_today() - timedelta(days=1)
    # Запись отнесена ко вчерашнему дню, а выпита позже, в 22 часа по UTC
    add(client, cups=3, date=yesterday.isoformat(), timestamp=f"{utc_today().isoformat()}T00:30:00+02:00")
    add(client, cups=1, date=yesterday.isoformat(), timestamp=f"{yesterday.isoformat()}T08:00:00Z")

    r = client.get("/coffee/stats", params={"days": 7, "timezone": "UTC"})
    assert r.status_code == 200
    stats = r.json()

    assert stats["daily"] == [{"date": yesterday.isoformat(), "cups": 4, "records": 2}]
    assert stats["summary"]["totalCups"] == 4
    assert stats["summary"]["activeDays"] == 1
    assert stats["summary"]["recordDays"] == 7
    assert stats["summary"]["maxPerDay"] == 4
    assert stats["summary"]["avgPerDay"] == 4.0

    hourly = {bucket["hour"]: bucket for bucket in stats["hourly"]}
    assert len(hourly) == 24
    assert hourly[22]["count"] == 3
    assert hourly[22]["percentage"] == 75
    assert hourly[8]["count"] == 1
    assert hourly[8]["percentage"] == 25

    weekday = {bucket["day"]: bucket for bucket in stats["weekday"]}
    assert weekday[(yesterday.weekday() + 1) % 7]["totalCups"] == 4


def test_stats_days_bounds(client, alice):
    assert client.get("/coffee/stats", params={"days": 0}).status_code == 400
    assert client.get("/coffee/stats", params={"days": 367}).status_code == 400


def test_settings_defaults_and_update(client, alice):
    assert client.get("/coffee/settings").json() == {
        "dailyLimit": 4, "warningThreshold": 3, "minInterval": 240
    }

    r = client.put("/coffee/settings", json={"dailyLimit": 5, "minInterval": 60})
    assert r.status_code == 200
    assert r.json() == {"dailyLimit": 5, "warningThreshold": 3, "minInterval": 60}

    r = client.put("/coffee/settings", json={"warningThreshold": 6})
    assert r.status_code == 400
    assert client.get("/coffee/settings").json()["warningThreshold"] == 3


def test_today_status(client, alice):
    status = client.get("/coffee/today", params={"timezone": "UTC"}).json()
    assert status["todayTotal"] == 0
    assert status["canDrink"] is True
    assert status["hoursSinceLast"] is None

    add(client, cups=3)

    status = client.get("/coffee/today", params={"timezone": "UTC"}).json()
    assert status["todayTotal"] == 3
    assert status["shouldWarn"] is True
    assert status["isOverLimit"] is False
    assert status["remainingCups"] == 1
    # Минимальный интервал по умолчанию 4 часа
    assert status["canDrink"] is False
    assert status["hoursSinceLast"] == 0.0
