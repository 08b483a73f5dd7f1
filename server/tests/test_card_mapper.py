from notecards.core.card_mapper import to_external, to_persisted
from notecards.db.models import Card


def test_to_external_groups_fields_and_stringifies_ids():
    card = Card(id=5, title="Test Card", content="Test content", pos_x=100, pos_y=200, width=300, height=400, message_id=10)

    assert to_external(card) == {
        "id": "5",
        "title": "Test Card",
        "content": "Test content",
        "position": {"x": 100, "y": 200},
        "size": {"width": 300, "height": 400},
        "messageId": "10",
    }


def test_to_external_omits_message_id_when_unlinked():
    card = Card(id=1, title="Card", content="Content", pos_x=0, pos_y=0, width=200, height=200, message_id=None)

    result = to_external(card)

    assert "messageId" not in result
    assert result.get("messageId") is None
    assert result["id"] == "1"
    assert isinstance(result["id"], str)


def test_to_external_accepts_mappings():
    row = {"id": 2, "title": "", "content": "", "pos_x": 1.5, "pos_y": 2.5, "width": 10, "height": 20, "message_id": 7}

    result = to_external(row)

    assert result["position"] == {"x": 1.5, "y": 2.5}
    assert result["messageId"] == "7"


def test_to_persisted_flattens_and_takes_link_from_argument():
    external = {
        "title": "Frontend Card",
        "content": "Frontend content",
        "position": {"x": 50, "y": 75},
        "size": {"width": 250, "height": 350},
        "messageId": "99",
    }

    assert to_persisted(external, 5) == {
        "content": "Frontend content",
        "pos_x": 50,
        "pos_y": 75,
        "width": 250,
        "height": 350,
        "message_id": 5,
    }


def test_to_persisted_defaults_missing_fields_to_none():
    assert to_persisted({"content": "only content"}) == {
        "content": "only content",
        "pos_x": None,
        "pos_y": None,
        "width": None,
        "height": None,
        "message_id": None,
    }
    assert to_persisted({"position": None, "size": {"width": 3}})["height"] is None
    assert to_persisted(None)["content"] is None
