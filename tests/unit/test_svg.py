# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import xml.etree.ElementTree as ET

from stackcensus.aggregate import aggregate
from stackcensus.chart.layout import compute_layout
from stackcensus.chart.svg import escape_xml, render_svg
from stackcensus.models import RepoDetection

SVG_NS = "{http://www.w3.org/2000/svg}"
NASTY = "<b>&'\""


def det(name, *ids):
    return RepoDetection(repo_name=name, framework_ids=frozenset(ids))


def _render(detections, **kwargs):
    return render_svg(compute_layout(aggregate(detections)), **kwargs)


def test_escape_xml_replaces_all_five_characters():
    escaped = escape_xml(NASTY)
    assert escaped == "&lt;b&gt;&amp;&apos;&quot;"
    for char in "<>'\"":
        assert char not in escaped


def test_framework_and_repo_names_are_escaped():
    svg = _render([det(f"repo{NASTY}", f"fw{NASTY}")], author=f"me{NASTY}")
    assert "FW&lt;B&gt;&amp;&apos;&quot;" in svg
    assert "repo&lt;b&gt;&amp;&apos;&quot;" in svg
    assert "ME&lt;B&gt;&amp;&apos;&quot;" in svg
    assert NASTY not in svg
    assert NASTY.upper() not in svg

    root = ET.fromstring(svg)
    texts = [el.text or "" for el in root.iter() if el.tag in (f"{SVG_NS}text", f"{SVG_NS}title")]
    assert any(text.startswith("FW<B>") for text in texts)


def test_document_structure():
    svg = _render([det("a", "react"), det("b", "react", "vue")], author="octocat")
    root = ET.fromstring(svg)
    assert root.tag == f"{SVG_NS}svg"
    assert root.attrib["width"] == "800"
    assert root.attrib["height"] == "450"

    texts = [el.text for el in root.iter(f"{SVG_NS}text")]
    assert "TECH STACK OVERVIEW" in texts
    assert "REACT" in texts and "VUE" in texts
    assert "3" in texts
    assert "TOTAL USES" in texts
    assert "67%" in texts and "33%" in texts
    assert "OCTOCAT" in texts

    circles = list(root.iter(f"{SVG_NS}circle"))
    # One circle per segment plus the center hole.
    assert len(circles) == 3


def test_reveal_animations_are_fixed_duration():
    svg = _render([det("a", "react")])
    root = ET.fromstring(svg)
    animations = list(root.iter(f"{SVG_NS}animate"))
    names = sorted(anim.attrib["attributeName"] for anim in animations)
    assert names == ["stroke-dasharray", "stroke-dashoffset", "width"]
    assert all(anim.attrib["dur"] == "0.8s" for anim in animations)
    width_anim = next(a for a in animations if a.attrib["attributeName"] == "width")
    assert width_anim.attrib["from"] == "0"
    assert width_anim.attrib["to"] == "180"


def test_ring_is_rotated_once_to_start_at_the_top():
    svg = _render([det("a", "react"), det("b", "vue"), det("c", "astro")])
    assert svg.count("rotate(-90 ") == 1


def test_tooltips_list_counts_and_repositories():
    svg = _render([det("a", "react"), det("b", "react")])
    root = ET.fromstring(svg)
    titles = {el.text for el in root.iter(f"{SVG_NS}title")}
    assert titles == {"react: 2 (a, b)"}


def test_rendering_is_deterministic():
    detections = [det("a", "react", "vue"), det("b", "vue"), det("c", "svelte")]
    assert _render(detections) == _render(detections)
