from datetime import datetime

from epic_free_games.core.records import GameRecordBuilder, build_games
from tests.catalog_fixtures import fixed_clock, make_element, make_offer


def _parse_display(value: str) -> datetime:
    return datetime.strptime(value.rsplit(" ", 1)[0], "%Y-%m-%d %H:%M:%S")


def test_zero_price_end_to_end():
    games = build_games([make_element(price="$0.00")], include_upcoming=True, timezone_name="UTC")
    assert len(games) == 1
    game = games[0]
    assert game["status"] == "free"
    assert game["date_precision"] == "estimated"
    assert _parse_display(game["end_date"]) - _parse_display(game["start_date"]) == (
        datetime(2000, 1, 8) - datetime(2000, 1, 1)
    )


def test_record_shape_and_field_order():
    element = make_element(title="Celeste", current=[[make_offer()]])
    game = build_games([element], include_upcoming=True, timezone_name="UTC", clock=fixed_clock)[0]
    assert list(game) == [
        "title", "description", "image_url", "url", "status",
        "start_date", "end_date", "date_precision", "publisher",
    ]
    assert game == {
        "title": "Celeste",
        "description": "Celeste description",
        "image_url": "https://cdn.example.com/Celeste.png",
        "url": "https://store.epicgames.com/en-US/p/test-game",
        "status": "free",
        "start_date": "2025-04-03 15:00:00 UTC",
        "end_date": "2025-04-10 15:00:00 UTC",
        "date_precision": "exact",
        "publisher": "Test Publisher",
    }


def test_empty_optional_fields_are_omitted():
    element = make_element(current=[[make_offer()]], description="", seller=None, keyImages=[])
    game = build_games([element], include_upcoming=True, timezone_name="UTC", clock=fixed_clock)[0]
    assert "description" not in game
    assert "publisher" not in game
    assert "image_url" not in game


def test_upstream_order_and_duplicates_are_kept():
    elements = [
        make_element(title="B", current=[[make_offer()]]),
        make_element(title="Paid", price="$9.99"),
        make_element(title="A", upcoming=[[make_offer()]]),
        make_element(title="B", current=[[make_offer()]]),
    ]
    games = build_games(elements, include_upcoming=True, timezone_name="UTC", clock=fixed_clock)
    assert [g["title"] for g in games] == ["B", "A", "B"]
    assert [g["status"] for g in games] == ["free", "coming soon", "free"]


def test_upcoming_disabled_drops_coming_soon():
    elements = [
        make_element(title="Now", current=[[make_offer()]]),
        make_element(title="Later", upcoming=[[make_offer()]]),
    ]
    games = build_games(elements, include_upcoming=False, timezone_name="UTC", clock=fixed_clock)
    assert [g["title"] for g in games] == ["Now"]


def test_fixed_clock_makes_output_repeatable():
    elements = [make_element(title="Zero", price="0"), make_element(title="Promo", current=[[make_offer()]])]
    first = build_games(elements, include_upcoming=True, timezone_name="Asia/Manila", clock=fixed_clock)
    second = build_games(elements, include_upcoming=True, timezone_name="Asia/Manila", clock=fixed_clock)
    assert first == second


def test_records_are_independent():
    elements = [make_element(title="One", current=[[make_offer()]]), make_element(title="Two", current=[[make_offer()]])]
    games = GameRecordBuilder(include_upcoming=True, timezone_name="UTC", clock=fixed_clock).build(elements)
    games[0]["title"] = "changed"
    assert games[1]["title"] == "Two"
    assert elements[0]["title"] == "One"


def test_invalid_timezone_uses_utc_plus_8():
    games = build_games([make_element(current=[[make_offer()]])], include_upcoming=True, timezone_name="Mars/Phobos")
    assert games[0]["start_date"] == "2025-04-03 23:00:00 UTC+8"


def test_null_list_members_do_not_abort_the_batch():
    element = make_element(
        title="Sparse",
        current=[[make_offer(), None]],
        keyImages=[None, {"type": "Thumbnail", "url": "https://cdn.example.com/sparse.png"}],
        offerMappings=[None, {"pageSlug": "sparse"}],
    )
    games = build_games([element, make_element(title="Next", price="0")], include_upcoming=True,
                        timezone_name="UTC", clock=fixed_clock)
    assert [g["title"] for g in games] == ["Sparse", "Next"]
    assert games[0]["image_url"] == "https://cdn.example.com/sparse.png"
    assert games[0]["url"] == "https://store.epicgames.com/en-US/p/sparse"
