"""Message segmentation of pasted chat text."""
from order_parser.core.models import RawMessage
from order_parser.extraction.segmenter import iter_messages, match_header, segment


def test_header_fields_are_captured():
    messages = segment("[07-07-2025 16:10] +91 96198 82148: Ginger tea 250 gm")

    assert messages == [
        RawMessage(
            date="07-07-2025",
            time="16:10",
            phone="+91 96198 82148",
            content="Ginger tea 250 gm",
        )
    ]


def test_one_message_per_header_line():
    text = "\n".join(
        [
            "[07-07-2025 16:10] +91 96198 82148: Ginger tea 250 gm",
            "[07-07-2025 16:11] +91 90000 00000: Cardamom 100 gm",
            "[08-07-2025 09:02] +44 7700 900123: Avocado 2",
        ]
    )

    messages = segment(text)

    assert len(messages) == 3
    assert [message.time for message in messages] == ["16:10", "16:11", "09:02"]
    assert messages[2].phone == "+44 7700 900123"


def test_continuation_lines_join_with_single_spaces():
    text = "\n".join(
        [
            "[07-07-2025 16:10] +91 96198 82148: Good morning Anil,",
            "  Ginger tea 250 gm",
            "masala tea 250gm A1 1023  ",
            "[07-07-2025 16:12] +91 90000 00000: Cardamom 100 gm",
        ]
    )

    first, second = segment(text)

    assert first.content == "Good morning Anil, Ginger tea 250 gm masala tea 250gm A1 1023"
    assert second.content == "Cardamom 100 gm"


def test_blank_lines_do_not_add_separators():
    text = "[07-07-2025 16:10] +91 96198 82148: Ginger tea\n\n   \n250 gm\n"

    (message,) = segment(text)

    assert message.content == "Ginger tea 250 gm"


def test_lines_before_first_header_are_dropped():
    text = "Messages are end-to-end encrypted.\nrandom note\n[07-07-2025 16:10] +91 96198 82148: Cardamom 100 gm"

    messages = segment(text)

    assert len(messages) == 1
    assert messages[0].content == "Cardamom 100 gm"


def test_consecutive_headers_with_empty_content_are_kept():
    text = "[07-07-2025 16:10] +91 96198 82148:\n[07-07-2025 16:11] +91 96198 82148: \n"

    messages = segment(text)

    assert [message.content for message in messages] == ["", ""]


def test_empty_header_content_takes_next_line():
    text = "[07-07-2025 16:20] +91 91234 56789:\nCardamom 100 gm A1-102"

    (message,) = segment(text)

    assert message.content == "Cardamom 100 gm A1-102"


def test_header_must_start_the_line():
    assert match_header("[07-07-2025 16:10] +91 96198 82148: hi")
    assert match_header("forwarded [07-07-2025 16:10] +91 96198 82148: hi") is None
    assert match_header("[7-7-2025 16:10] +91 96198 82148: hi") is None
    assert match_header("[07-07-2025 16:10] Priya: hi") is None


def test_iter_messages_is_restartable():
    text = "[07-07-2025 16:10] +91 96198 82148: Ginger tea 250 gm"

    assert list(iter_messages(text)) == list(iter_messages(text))


def test_empty_text_yields_nothing():
    assert segment("") == []
    assert segment("\n\n") == []
