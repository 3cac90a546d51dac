"""
Unit tests for protocol.attributes module.

Tests:
- parse_attribute_blocks() block names, descriptors, raw lines, key/value maps
- Status line handling
- split_menu_attribute_records() record boundaries
"""

from burrow.protocol.attributes import parse_attribute_blocks, split_menu_attribute_records


class TestParseAttributeBlocks:
    def test_block_names_in_order(self, sample_attribute_text):
        blocks = parse_attribute_blocks(sample_attribute_text)
        assert list(blocks) == ["INFO", "ADMIN", "VIEWS"]

    def test_info_descriptor(self, sample_attribute_text):
        info = parse_attribute_blocks(sample_attribute_text)["INFO"]
        assert info.name == "INFO"
        assert info.descriptor == "0whatsnew.txt\t/whatsnew.txt\tgopher.example.com 70\t+"
        assert info.raw_lines == ""
        assert dict(info.lines) == {}

    def test_admin_lines(self, sample_attribute_text):
        admin = parse_attribute_blocks(sample_attribute_text)["ADMIN"]
        assert admin.descriptor == ""
        assert dict(admin.lines) == {
            "Admin": "Foo Bar <foobar@example.com>",
            "Mod-Date": "Sun Feb 21 20:19:18 2021 <20210221201918>",
        }

    def test_views_raw_lines(self, sample_attribute_text):
        views = parse_attribute_blocks(sample_attribute_text)["VIEWS"]
        assert views.raw_lines == " text/plain: <1k>\r\n text/html: <2k>\r\n"
        assert dict(views.lines) == {"text/plain": "<1k>", "text/html": "<2k>"}

    def test_status_line_discarded_unconditionally(self):
        blocks = parse_attribute_blocks("+INFO: first\n+ADMIN:\n Admin: x")
        assert list(blocks) == ["ADMIN"]

    def test_framed_body_keeps_first_line(self):
        blocks = parse_attribute_blocks("+INFO: first\r\n+ADMIN:\r\n Admin: x", has_status_line=False)
        assert list(blocks) == ["INFO", "ADMIN"]
        assert blocks["ADMIN"].raw_lines == " Admin: x\r\n"

    def test_content_before_first_block_dropped(self):
        blocks = parse_attribute_blocks("+-2\n orphan: line\n+VIEWS:\n a: b")
        assert list(blocks) == ["VIEWS"]
        assert blocks["VIEWS"].raw_lines == " a: b\r\n"

    def test_pairs_need_key_and_value(self):
        blocks = parse_attribute_blocks("+-2\n+ABSTRACT:\n Just prose\n Key:\n : value\n k: v")
        abstract = blocks["ABSTRACT"]
        assert dict(abstract.lines) == {"k": "v"}
        assert abstract.raw_lines == " Just prose\r\n Key:\r\n : value\r\n k: v\r\n"

    def test_value_split_on_first_colon(self):
        blocks = parse_attribute_blocks("+-2\n+ADMIN:\n Mod-Date: 12:30:00")
        assert blocks["ADMIN"].lines["Mod-Date"] == "12:30:00"

    def test_block_without_colon(self):
        blocks = parse_attribute_blocks("+-2\n+ASK\n Ask: Name?")
        assert "ASK" in blocks
        assert blocks["ASK"].descriptor == ""

    def test_empty_lines_inside_block_kept(self):
        text = "+-2\r\n+ABSTRACT:\r\n para one\r\n\r\n para two\r\n"
        abstract = parse_attribute_blocks(text)["ABSTRACT"]
        assert abstract.raw_lines == " para one\r\n\r\n para two\r\n"
        assert dict(abstract.lines) == {}

    def test_final_terminator_adds_no_line(self):
        blocks = parse_attribute_blocks("+-2\r\n+VIEWS:\r\n text/plain: <1k>\r\n")
        assert blocks["VIEWS"].raw_lines == " text/plain: <1k>\r\n"

    def test_empty_text(self):
        assert parse_attribute_blocks("") == {}


class TestSplitMenuAttributeRecords:
    def test_records_per_info(self):
        text = (
            "+INFO: 0One\t/one\thost\t70\t+\r\n"
            "+ADMIN:\r\n"
            " Admin: A\r\n"
            "+INFO: 1Two\t/two\thost\t70\t+\r\n"
            "+VIEWS:\r\n"
            " text/plain: <1k>\r\n"
        )
        records = split_menu_attribute_records(text)
        assert len(records) == 2
        assert records[0].startswith("+INFO: 0One")
        assert "+ADMIN:" in records[0]
        assert "+VIEWS:" not in records[0]
        assert records[1].startswith("+INFO: 1Two")
        assert "text/plain" in records[1]

    def test_leading_lines_dropped(self):
        records = split_menu_attribute_records("+-2\r\nnoise\r\n+INFO: 0One\t/one\thost\t70")
        assert records == ["+INFO: 0One\t/one\thost\t70"]

    def test_no_info(self):
        assert split_menu_attribute_records("+ADMIN:\r\n Admin: A") == []

    def test_records_parse_back(self):
        text = "+INFO: 0One\t/one\thost\t70\r\n+ADMIN:\r\n Admin: A\r\n"
        record = split_menu_attribute_records(text)[0]
        blocks = parse_attribute_blocks(record, has_status_line=False)
        assert blocks["INFO"].descriptor == "0One\t/one\thost\t70"
        assert blocks["ADMIN"].lines["Admin"] == "A"
