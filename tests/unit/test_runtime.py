# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from stackcensus.config import ScanSettings
from stackcensus.errors import RepositoryListingError
from stackcensus.github.source import InMemoryRepositorySource
from stackcensus.runtime import StackCensus
from stackcensus.scan import load_results


def pkg(*names) -> str:
    return json.dumps({"dependencies": {name: "*" for name in names}})


def _settings(tmp_path, **overrides):
    return ScanSettings(
        username=overrides.pop("username", "octocat"),
        repo_delay=0,
        result_file=tmp_path / "out" / "result.json",
        chart_file=tmp_path / "out" / "stats-chart.svg",
        audit_log=None,
        **overrides,
    )


class BrokenListing(InMemoryRepositorySource):
    def list_owned_repositories(self, page_size=100):
        raise RepositoryListingError("listing failed", status_code=500)


class ClosingSource(InMemoryRepositorySource):
    closed = False

    def close(self):
        self.closed = True


def test_run_writes_both_artifacts(tmp_path):
    source = InMemoryRepositorySource(
        {
            "a": {"package.json": pkg("react")},
            "b": {"package.json": pkg("react", "vue")},
            "plain": {"README.md": "hi"},
        }
    )
    settings = _settings(tmp_path)
    with StackCensus(source, scan_settings=settings) as census:
        run = census.run()

    assert run.aggregate.total_count == 3
    assert run.result_file == settings.result_file
    records = json.loads(settings.result_file.read_text(encoding="utf-8"))
    assert records == [
        {"repoName": "a", "frameworks": ["react"], "url": "https://github.com/octocat/a"},
        {"repoName": "b", "frameworks": ["react", "vue"], "url": "https://github.com/octocat/b"},
    ]
    assert [d.repo_name for d in load_results(settings.result_file)] == ["a", "b"]

    svg = settings.chart_file.read_text(encoding="utf-8")
    assert run.chart_file == settings.chart_file
    assert svg.startswith("<svg")
    assert "REACT" in svg and "VUE" in svg
    assert "OCTOCAT" in svg


def test_run_without_detections_writes_empty_results_and_no_chart(tmp_path):
    source = InMemoryRepositorySource({"plain": {"README.md": "hi"}})
    settings = _settings(tmp_path)
    run = StackCensus(source, scan_settings=settings).run()
    assert run.chart_file is None
    assert json.loads(settings.result_file.read_text(encoding="utf-8")) == []
    assert not settings.chart_file.exists()


def test_listing_failure_aborts_without_writing_artifacts(tmp_path):
    settings = _settings(tmp_path)
    census = StackCensus(BrokenListing({}), scan_settings=settings)
    with pytest.raises(RepositoryListingError):
        census.run()
    assert not settings.result_file.exists()
    assert not settings.chart_file.exists()


def test_custom_catalog_flows_through_classification_and_colors(tmp_path):
    from stackcensus.catalog import FrameworkCatalog, FrameworkDefinition

    catalog = FrameworkCatalog(
        definitions=(FrameworkDefinition(id="lit", package_names=frozenset({"lit", "lit-element"})),),
        colors={"lit": "#324FFF"},
    )
    source = InMemoryRepositorySource({"wc": {"package.json": pkg("lit-element", "react")}})
    census = StackCensus(source, scan_settings=_settings(tmp_path), catalog=catalog)
    summary = census.scan()
    assert summary.detections[0].framework_ids == frozenset({"lit"})
    result = census.aggregate(summary.detections)
    assert result.stats[0].color == "#324FFF"


def test_render_returns_none_for_empty_aggregate(tmp_path):
    census = StackCensus(InMemoryRepositorySource({}), scan_settings=_settings(tmp_path))
    assert census.render(census.aggregate([])) is None


def test_context_manager_closes_source(tmp_path):
    source = ClosingSource({})
    with StackCensus(source, scan_settings=_settings(tmp_path)):
        pass
    assert source.closed


def test_run_without_detections_removes_a_chart_from_an_earlier_run(tmp_path):
    settings = _settings(tmp_path)
    settings.chart_file.parent.mkdir(parents=True)
    settings.chart_file.write_text("<svg>old</svg>", encoding="utf-8")

    run = StackCensus(InMemoryRepositorySource({"plain": {}}), scan_settings=settings).run()

    assert run.chart_file is None
    assert not settings.chart_file.exists()
    assert json.loads(settings.result_file.read_text(encoding="utf-8")) == []
