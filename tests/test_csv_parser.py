from import_engine.csv_parser import (
    parse_csv, parse_line, serialize_csv, table_columns, decode_text,
)

from conftest import SAMPLE_CSV


def test_row_count_skips_blank_lines():
    text = "Internal ID,Blank Silo\n1,Cotton\n\n   \n2,Wool\n"
    rows = parse_csv(text)
    assert len(rows) == 2
    assert all(set(r) >= {"Internal ID", "Blank Silo"} for r in rows)


def test_ids_follow_line_order():
    rows = parse_csv("A\nx\n\ny\nz")
    assert [r["_id"] for r in rows] == [0, 1, 2]
    assert [r["A"] for r in rows] == ["x", "y", "z"]


def test_quoted_comma_stays_in_field():
    rows = parse_csv(SAMPLE_CSV)
    assert rows[2]["Color"] == "Navy, Dark"
    assert rows[2]["AW_Front"] == "www.img/3.png"


def test_short_rows_padded_long_rows_truncated():
    rows = parse_csv("a,b,c\n1\n1,2,3,4,5")
    assert rows[0] == {"_id": 0, "a": "1", "b": "", "c": ""}
    assert rows[1] == {"_id": 1, "a": "1", "b": "2", "c": "3"}


def test_fields_and_headers_trimmed():
    rows = parse_csv(' "Internal ID" , Color \r\n 7 ,  "Red"  \r\n')
    assert rows == [{"_id": 0, "Internal ID": "7", "Color": "Red"}]


def test_doubled_quotes_are_not_unescaped():
    assert parse_line('"say ""hi""",x') == ["say hi", "x"]


def test_empty_input_gives_no_rows():
    assert parse_csv("") == []
    assert parse_csv("   \n") == []
    assert parse_csv("only,header") == []


def test_bytes_with_bom():
    rows = parse_csv(b"\xef\xbb\xbfInternal ID\n42\n")
    assert rows[0]["Internal ID"] == "42"
    assert decode_text("\ufeffabc") == "abc"


def test_serialize_quotes_values_with_commas():
    rows = [{"a": "1,2", "b": 3}, {"a": None}]
    assert serialize_csv(rows, ["a", "b"]) == 'a,b\n"1,2",3\n,'


def test_parse_then_serialize_is_identity_for_plain_values():
    text = "Internal ID,Blank Silo,Color\n1,Cotton,Red\n2,Wool,Blue"
    rows = parse_csv(text)
    assert serialize_csv(rows, table_columns(rows)) == text


def test_table_columns_excludes_metadata():
    rows = [{"_id": 0, "_isNew": True, "_addedDate": "x", "A": "1", "B": "2"}]
    assert table_columns(rows) == ["A", "B"]
    assert table_columns([]) == []
