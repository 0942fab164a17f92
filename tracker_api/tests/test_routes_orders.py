import threading

from tracker_api.app.domain import OrderStatus


def test_delivered_order_page_stays_delivered(make_client):
    client, _ = make_client()
    resp = client.get("/order/1")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert resp.text == (
        '<html><head></head><body><div id="currentStep">5</div></body></html>'
    )
    assert '<div id="currentStep">5</div>' in client.get("/order/1").text


def test_unknown_order_page_starts_at_deferred(make_client):
    client, repo = make_client()
    assert '<div id="currentStep">0</div>' in client.get("/order/2").text
    assert '<div id="currentStep">1</div>' in client.get("/order/2").text
    assert repo.find_by_id(2).status is OrderStatus.REVIEWING


def test_fetch_skips_random_draw_by_default(make_client, no_draw):
    client, _ = make_client(rng=no_draw, advance_on_list=False)
    assert client.get("/order/2").status_code == 200


def test_fetch_double_advance_variant(make_client, always):
    client, repo = make_client(rng=always, double_advance_on_fetch=True)
    resp = client.get("/order/2")
    assert '<div id="currentStep">1</div>' in resp.text
    assert repo.find_by_id(2).status is OrderStatus.REVIEWING


def test_missing_order_is_404(make_client):
    client, repo = make_client()
    resp = client.get("/order/999")
    assert resp.status_code == 404
    assert resp.json() == {
        "meta": {"code": 404, "error": "order not found", "info": ""},
        "response": None,
    }
    assert resp.headers["X-Request-ID"]
    assert "currentStep" not in resp.text
    assert [o.status for o in repo.list_all()] == [
        OrderStatus.DELIVERED,
        OrderStatus.UNKNOWN,
    ]


def test_non_numeric_order_id_rejected(make_client):
    client, _ = make_client()
    assert client.get("/order/abc").status_code == 422


def test_unknown_route_uses_envelope(make_client):
    client, _ = make_client()
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json()["meta"]["code"] == 404


def test_list_orders_envelope(make_client):
    client, _ = make_client()
    resp = client.get("/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["meta"] == {"code": 200, "error": "", "info": ""}
    assert len(body["response"]) == 2
    first, second = body["response"]
    assert first == {
        "orderId": 1,
        "orderTrackerLink": "http://localhost:8888/order/1",
        "orderStatusImage": "/webfile?name=order-tracker-delivered.png",
        "timeOrdered": "Tue 18 Sep 2018 12:00:00",
    }
    assert second["orderStatusImage"].endswith("unknown.png")
    assert "status" not in second


def test_list_advances_after_response(make_client):
    client, repo = make_client()
    first = client.get("/").json()["response"]
    assert first[1]["orderStatusImage"].endswith("unknown.png")
    # unknown orders re-enter the progression even when the draw fails
    assert repo.find_by_id(2).status is OrderStatus.DEFERRED
    assert repo.find_by_id(1).status is OrderStatus.DELIVERED
    second = client.get("/").json()["response"]
    assert second[1]["orderStatusImage"].endswith("deferred.png")


def test_list_with_successful_draws(make_client, always):
    client, repo = make_client(rng=always)
    client.get("/")
    client.get("/")
    assert repo.find_by_id(2).status is OrderStatus.REVIEWING
    assert repo.find_by_id(1).status is OrderStatus.DELIVERED


def test_repeated_listing_keeps_orders(make_client, always):
    client, _ = make_client(rng=always)
    for _ in range(10):
        ids = [o["orderId"] for o in client.get("/").json()["response"]]
        assert ids == [1, 2]


def test_list_without_advance(make_client, no_draw):
    client, repo = make_client(rng=no_draw, advance_on_list=False)
    client.get("/")
    assert repo.find_by_id(2).status is OrderStatus.UNKNOWN


def test_list_without_status_images(make_client):
    client, _ = make_client(status_images=False)
    for order in client.get("/").json()["response"]:
        assert set(order) == {"orderId", "orderTrackerLink", "timeOrdered"}


def test_request_id_round_trip(make_client):
    client, _ = make_client()
    resp = client.get("/", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"
    assert client.get("/order/1").headers["X-Request-ID"]


def test_malformed_request_id_replaced(make_client):
    client, _ = make_client()
    resp = client.get("/", headers={"X-Request-ID": "not a valid id!"})
    assert resp.headers["X-Request-ID"] != "not a valid id!"
    assert len(resp.headers["X-Request-ID"]) == 32


def test_list_side_effect_runs_on_request_thread(make_client, monkeypatch):
    client, repo = make_client()
    threads = {"fetch": set(), "list": set()}
    phase = {"name": "fetch"}
    advance = repo.advance
    maybe_advance = repo.maybe_advance

    def record_advance(order):
        threads[phase["name"]].add(threading.current_thread().name)
        return advance(order)

    def record_maybe_advance(order):
        threads[phase["name"]].add(threading.current_thread().name)
        return maybe_advance(order)

    monkeypatch.setattr(repo, "advance", record_advance)
    monkeypatch.setattr(repo, "maybe_advance", record_maybe_advance)

    with client:
        client.get("/order/1")
        phase["name"] = "list"
        client.get("/")
    assert threads["list"]
    assert threads["list"] == threads["fetch"]
