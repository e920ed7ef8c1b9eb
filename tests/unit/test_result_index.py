# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from guardconsole.core.index import SCAN_SUMMARY_COLUMNS, ResultIndex
from guardconsole.models import ScanRecord, ScanSubEntry, ScanSummary


def _record(service, region="us-east-1", cost=0, findings=()):
    return ScanRecord(service=service, region=region, resource_cost=cost, findings=tuple(findings))


def _costs(records):
    return [r.resource_cost for r in records]


def test_sort_by_resource_cost():
    index = ResultIndex([_record("a", cost=5), _record("b", cost=1), _record("c", cost=3)])
    index.sort_by("resource_cost", "asc")
    assert _costs(index.rows) == [1, 3, 5]
    index.sort_by("resource_cost", "desc")
    assert _costs(index.rows) == [5, 3, 1]
    index.sort_by("resource_cost", "asc")
    assert _costs(index.rows) == [1, 3, 5]


def test_sort_is_stable_in_both_directions():
    records = [_record("s3", "r1"), _record("ec2", "r2"), _record("s3", "r3"), _record("ec2", "r4")]
    index = ResultIndex(records)
    index.sort_by("service", "asc")
    assert [r.region for r in index.rows] == ["r2", "r4", "r1", "r3"]
    index.sort_by("service", "desc")
    assert [r.region for r in index.rows] == ["r1", "r3", "r2", "r4"]


def test_resort_replaces_previous_key():
    records = [_record("b", "eu", cost=1), _record("a", "us", cost=2), _record("c", "ap", cost=3)]
    index = ResultIndex(records)
    index.sort_by("region", "asc")
    index.sort_by("service", "asc")
    assert [r.service for r in index.rows] == ["a", "b", "c"]
    assert index.sort_state == ("service", "asc")


def test_sort_by_derived_findings_count():
    index = ResultIndex([_record("a", findings=["x", "y"]), _record("b"), _record("c", findings=["z"])])
    index.sort_by("findings", "desc")
    assert [r.service for r in index.rows] == ["a", "c", "b"]


def test_sort_rejects_unknown_or_unsortable_columns():
    index = ResultIndex([_record("a")])
    with pytest.raises(ValueError):
        index.sort_by("nope")
    with pytest.raises(ValueError):
        index.sort_by("summary")
    with pytest.raises(ValueError):
        index.sort_by("service", "sideways")


def test_search_is_case_insensitive():
    index = ResultIndex([_record("s3"), _record("ec2"), _record("lambda", region="eu-west-1")])
    assert [r.service for r in index.search("S3")] == ["s3"]
    assert [r.service for r in index.search("EU-")] == ["lambda"]
    assert len(index.search("")) == 3


def test_search_respects_current_sort():
    index = ResultIndex([_record("s3", "us-east-1", cost=2), _record("s3", "us-west-2", cost=1), _record("iam", "us-east-2")])
    index.sort_by("resource_cost", "asc")
    assert [r.region for r in index.search("s3")] == ["us-west-2", "us-east-1"]


def test_search_column_is_configurable():
    index = ResultIndex([_record("s3", "us-east-1"), _record("ec2", "s3-like-region")], search_columns=("service",))
    assert [r.service for r in index.search("s3")] == ["s3"]
    index.set_search_columns(["region"])
    assert [r.service for r in index.search("s3")] == ["ec2"]


def test_paginate_slices_filtered_view():
    index = ResultIndex([_record(f"svc{i}", cost=i) for i in range(25)])
    assert len(index.paginate(0, 10)) == 10
    assert len(index.paginate(2, 10)) == 5
    assert index.page_count(10) == 3
    assert index.can_next(1, 10)
    assert not index.can_next(2, 10)
    assert not index.can_previous(0)
    index.search("svc2")
    assert [r.service for r in index.paginate(0, 10)] == ["svc2", "svc20", "svc21", "svc22", "svc23", "svc24"]


def test_paginate_out_of_range_returns_empty():
    index = ResultIndex([_record(str(i)) for i in range(5)])
    assert index.paginate(10, 10) == []
    assert index.paginate(-1, 10) == []
    with pytest.raises(ValueError):
        index.paginate(0, 0)


def test_duplicate_records_are_kept():
    same = _record("s3")
    index = ResultIndex([same, same])
    assert len(index.search("s3")) == 2


def test_render_uses_placeholder_for_zero_cost():
    index = ResultIndex([_record("s3", cost=0), _record("ec2", cost=4)])
    rendered = [index.render(r)["resource_cost"] for r in index.rows]
    assert rendered == ["-", "4"]


def test_with_records_carries_sort_and_search():
    index = ResultIndex([_record("s3", cost=1)])
    index.sort_by("resource_cost", "desc")
    index.search("s3")
    rebuilt = index.with_records([_record("s3", cost=1), _record("ec2", cost=9), _record("s3", region="eu", cost=5)])
    assert rebuilt.sort_state == ("resource_cost", "desc")
    assert rebuilt.query == "s3"
    assert _costs(rebuilt.rows) == [5, 1]


def test_summary_columns_sort_by_created():
    scans = [
        ScanSummary(scan_id="a", created=100),
        ScanSummary(scan_id="b", created=300),
        ScanSummary(scan_id="c", created=200),
    ]
    index = ResultIndex(scans, columns=SCAN_SUMMARY_COLUMNS, search_columns=("scan_id",))
    index.sort_by("created", "desc")
    assert [s.scan_id for s in index.rows] == ["b", "c", "a"]


def test_entries_are_not_indexed_or_touched():
    entry = ScanSubEntry(title="t", commands=("ls",))
    record = ScanRecord(service="s3", region="us-east-1", entries=(entry,))
    index = ResultIndex([record])
    index.sort_by("service")
    assert index.rows[0].entries == (entry,)


def test_whitespace_query_is_matched_literally():
    index = ResultIndex([_record("s3", "us-east-1"), _record("ec2", "eu-west-1")], search_columns=("service",))
    assert index.search(" ") == []
    assert index.query == " "


def test_clear_sort_restores_source_order():
    index = ResultIndex([_record("b", cost=2), _record("a", cost=1), _record("c", cost=3)])
    index.sort_by("service", "desc")
    index.clear_sort()
    assert index.sort_state is None
    assert [r.service for r in index.rows] == ["b", "a", "c"]
