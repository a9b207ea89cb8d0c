from __future__ import annotations

import json

import pytest

from learnstack.errors import ParseError
from learnstack.parsers import GVIZ_PREFIX_LENGTH, canonical_record, parse_csv, parse_gviz, parse_records

GVIZ_PREFIX = "/*O_o*/\ngoogle.visualization.Query.setResponse("


def gviz_envelope(payload: dict) -> str:
    return f"{GVIZ_PREFIX}{json.dumps(payload)});"


def test_gviz_prefix_length_matches_envelope():
    assert len(GVIZ_PREFIX) == GVIZ_PREFIX_LENGTH


def test_parse_csv_lowercases_and_trims_headers():
    text = " ID , Title ,Category\nc01, Biology 101 ,Biology\nc02,Web,CS\n"

    records = parse_csv(text)

    assert records == [
        {"id": "c01", "title": "Biology 101", "category": "Biology"},
        {"id": "c02", "title": "Web", "category": "CS"},
    ]


def test_parse_csv_row_count_is_line_count_minus_header():
    lines = ["id,title"] + [f"c{i},Course {i}" for i in range(25)]

    records = parse_csv("\n".join(lines))

    assert len(records) == len(lines) - 1
    assert records[7]["title"] == "Course 7"


def test_parse_csv_pads_short_rows_and_keeps_them():
    records = parse_csv("id,title,price\nc01\n\nc03,Only title")

    assert records == [
        {"id": "c01", "title": "", "price": ""},
        {"id": "", "title": "", "price": ""},
        {"id": "c03", "title": "Only title", "price": ""},
    ]


def test_parse_csv_handles_crlf_line_endings():
    records = parse_csv("id,title\r\nc01,Biology\r\n")

    assert records == [{"id": "c01", "title": "Biology"}]


def test_parse_csv_splits_embedded_commas_positionally():
    records = parse_csv('id,title,level\nc01,"Hello, world",Beginner')

    assert records[0] == {"id": "c01", "title": '"Hello', "level": 'world"'}


def test_parse_csv_empty_input():
    assert parse_csv("") == []
    assert parse_csv("  \n ") == []


def test_parse_gviz_preserves_header_casing_and_blanks_null_cells():
    text = gviz_envelope(
        {
            "version": "0.6",
            "table": {
                "cols": [{"label": "ID"}, {"label": "Title"}, {"label": "VideoUrl"}],
                "rows": [
                    {"c": [{"v": "c01"}, {"v": "Biology"}, None]},
                    {"c": [{"v": "c02"}, {"v": None}]},
                ],
            },
        }
    )

    records = parse_gviz(text)

    assert records == [
        {"ID": "c01", "Title": "Biology", "VideoUrl": ""},
        {"ID": "c02", "Title": "", "VideoUrl": ""},
    ]


def test_parse_gviz_renders_numbers_as_text():
    text = gviz_envelope({"table": {"cols": [{"label": "Price"}, {"label": "Rating"}], "rows": [{"c": [{"v": 25.0}, {"v": 4.5}]}]}})

    assert parse_gviz(text) == [{"Price": "25", "Rating": "4.5"}]


@pytest.mark.parametrize(
    "text",
    [
        "",
        "not a table-query response at all",
        GVIZ_PREFIX + "{broken json);",
        gviz_envelope({"status": "error"}),
        gviz_envelope({"table": {"cols": ["ID"], "rows": [["c01"]]}}),
        gviz_envelope({"table": {"cols": {"label": "ID"}, "rows": []}}),
        gviz_envelope({"table": {"cols": [{"label": "ID"}], "rows": [{"c": "c01"}]}}),
    ],
)
def test_parse_gviz_rejects_malformed_envelopes(text):
    with pytest.raises(ParseError):
        parse_gviz(text)


def test_parse_records_dispatches_on_mode():
    assert parse_records("id\nc01", "csv") == [{"id": "c01"}]
    with pytest.raises(ValueError):
        parse_records("id\nc01", "xml")


def test_canonical_record_maps_pascal_case_labels():
    record = {
        "ID": "c01",
        "Title": "Biology",
        "ShortDescription": "Short",
        "FullDescription": "Long",
        "VideoURL": "https://example.com/v",
        "Resources": "A|#",
    }

    assert canonical_record(record, "gviz") == {
        "id": "c01",
        "title": "Biology",
        "short": "Short",
        "fulldesc": "Long",
        "video_url": "https://example.com/v",
        "resources": "A|#",
    }


def test_canonical_record_leaves_csv_keys_alone():
    record = {"id": "c01", "fulldesc": "Long"}

    assert canonical_record(record, "csv") == record
