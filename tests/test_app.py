import time
from datetime import datetime, timezone

from app import local_time_filter
from navigation import ERROR_MESSAGE


def _body(level=15, availability_offset=-1000):
    now_ms = int(time.time() * 1000)
    return {
        "name": "XYZ",
        "level": level,
        "revisionDate": now_ms - 2000,
        "availabilityDate": now_ms + availability_offset,
    }


def test_index_redirects_to_checker(client) -> None:
    response = client.get("/")
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/lol-name-checker")


def test_idle_page_makes_no_lookup(client, fake_api) -> None:
    response = client.get("/lol-name-checker?region=na")
    body = response.get_data(as_text=True)

    assert response.status_code == 200
    assert fake_api.calls == []
    assert 'class="availability"' not in body
    assert "lol-name-checker-top" in body
    assert "lol-name-checker-bottom" not in body


def test_found_available_summoner(client, fake_api) -> None:
    fake_api.respond(200, _body(level=15))
    response = client.get("/lol-name-checker?region=na&name=xyz")
    body = response.get_data(as_text=True)

    assert fake_api.calls == ["https://lookup.test/na/summoner/xyz"]
    assert "Summoner name &#39;xyz&#39; is" in body
    assert '<span class="available">available</span>' in body
    assert "min(30, max(6, 15)) = 15 months" in body
    assert "Expired:" in body
    assert ERROR_MESSAGE not in body
    assert "lol-name-checker-bottom" in body


def test_found_unavailable_summoner_shows_expiry(client, fake_api) -> None:
    fake_api.respond(200, _body(level=99, availability_offset=86_400_000))
    body = client.get("/lol-name-checker?region=euw&name=xyz").get_data(as_text=True)

    assert '<span class="unavailable">unavailable</span>' in body
    assert "Expires:" in body
    assert "= 30 months" in body


def test_not_found_is_reported_available(client, fake_api) -> None:
    fake_api.respond(404)
    body = client.get("/lol-name-checker?region=na&name=xyz").get_data(as_text=True)

    assert "Summoner name &#39;xyz&#39; is" in body
    assert "We found no summoner who currently has this name." in body
    assert "Name Decay" not in body
    assert "Expire" not in body
    assert ERROR_MESSAGE not in body


def test_server_error_notifies_once(client, fake_api) -> None:
    fake_api.respond(500)
    body = client.get("/lol-name-checker?region=na&name=xyz").get_data(as_text=True)

    assert body.count(ERROR_MESSAGE) == 1
    assert 'class="availability"' not in body
    assert "lol-name-checker-bottom" not in body
    # form keeps the query so the user can resubmit
    assert 'value="xyz"' in body


def _form(body: str) -> str:
    return body.split("<form", 1)[1].split("</form>", 1)[0]


def test_form_reflects_query(client, fake_api) -> None:
    fake_api.respond(404)
    body = client.get("/lol-name-checker?region=oce&name=abc").get_data(as_text=True)
    form = _form(body)

    assert '<option value="oce" selected>' in form
    assert 'value="abc"' in form
    assert '<option value="na">' in form


def test_form_submits_current_inputs_and_blocks_short_names(client, fake_api) -> None:
    form = _form(client.get("/lol-name-checker").get_data(as_text=True))

    # native GET submit of whatever is typed, no href fixed at render time
    assert 'method="get"' in form
    assert '<button type="submit"' in form
    assert "href=" not in form
    # browser validation stops both click and Enter below three characters
    name_input = form.split('name="name"', 1)[1].split(">", 1)[0]
    assert 'minlength="3"' in name_input
    assert "required" in name_input


def test_non_canonical_query_redirects_without_lookup(client, fake_api) -> None:
    response = client.get("/lol-name-checker?region=NA&name=Hide+On+Bush")

    assert response.status_code == 302
    assert response.headers["Location"].endswith(
        "/lol-name-checker?region=na&name=hide%20on%20bush"
    )
    assert fake_api.calls == []

    fake_api.respond(404)
    followed = client.get("/lol-name-checker?region=NA&name=XYZ", follow_redirects=True)
    assert followed.status_code == 200
    assert fake_api.calls == ["https://lookup.test/na/summoner/xyz"]


def test_local_time_names_the_zone() -> None:
    dt = datetime(2024, 3, 9, 15, 4, 5, tzinfo=timezone.utc)
    local = dt.astimezone()

    rendered = local_time_filter(dt)
    assert rendered.startswith(local.strftime("%m/%d/%Y %I:%M:%S %p"))
    assert rendered.endswith(local.strftime("%Z"))


def test_ads_are_demo_outside_production(client, app, fake_api) -> None:
    body = client.get("/lol-name-checker").get_data(as_text=True)
    assert '"demo": true' in body

    app.config["ENVIRONMENT"] = "production"
    try:
        body = client.get("/lol-name-checker").get_data(as_text=True)
        assert '"demo": false' in body
    finally:
        app.config["ENVIRONMENT"] = "development"


def test_page_props_are_embedded(client, fake_api) -> None:
    fake_api.respond(404)
    body = client.get("/lol-name-checker?region=las&name=xyz").get_data(as_text=True)
    assert '"initialRegion": "las"' in body
    assert '"notFound": true' in body
