"""Tests for chroma_sense.core.report: text and JSON formatting."""

import json

from chroma_sense.core.report import format_json, format_text
from chroma_sense.core.types import Report


def _report() -> Report:
    report = Report()
    report.set_dimensions('photo.png', 640, 480)
    report.add('photo.png', 'palette', {'dominant': '#f00000', 'palette': ['#f00000', '#0000f0'], 'elapsed_ms': 1.5})
    report.add(
        'photo.png',
        'census',
        {
            'top': [{'hex': '#f00000', 'count': 30, 'pct': 75.0}, {'hex': '#0000f0', 'count': 10, 'pct': 25.0}],
            'samples': 40,
            'distinct': 2,
        },
    )
    return report


class TestFormatText:
    def test_header_and_section(self):
        text = format_text(_report())
        assert text.startswith('chroma-sense: 1 image(s)')
        assert '── photo.png (640×480)' in text

    def test_palette_lines(self):
        text = format_text(_report())
        assert '  dominant: #f00000' in text
        assert '  palette:  #f00000  #0000f0' in text
        assert '  time:     1.50ms' in text

    def test_census_line(self):
        assert '  census: #f00000:75.0%, #0000f0:25.0% (40 samples)' in format_text(_report())

    def test_empty_palette(self):
        report = Report()
        report.add('clear.png', 'palette', {'dominant': '#000000', 'palette': []})
        assert 'palette:  (empty, no opaque pixels sampled)' in format_text(report)

    def test_expect_summary(self):
        report = _report()
        report.add('photo.png', 'expect', {'expected': '#ff0000', 'actual': '#f00000', 'distance': 15.0, 'pass': True})
        report.record_pass('photo.png')
        text = format_text(report)
        assert 'expect: #ff0000  got #f00000  Δ=15.0  ✓' in text
        assert text.endswith('PASS 1/1 images  FAIL 0/1 images')

    def test_no_summary_without_expect(self):
        assert 'PASS' not in format_text(_report())


class TestFormatJson:
    def test_structure(self):
        parsed = json.loads(format_json(_report()))
        image = parsed['images'][0]
        assert image['path'] == 'photo.png'
        assert image['dimensions'] == {'width': 640, 'height': 480}
        assert image['techniques']['palette']['palette'] == ['#f00000', '#0000f0']
        assert parsed['summary'] == {'total': 0, 'pass': 0, 'fail': 0}

    def test_expected_in_summary(self):
        report = Report(expected='#ff0000')
        report.add('a.png', 'dominant', {'dominant': '#f00000'})
        parsed = json.loads(format_json(report))
        assert parsed['summary']['expected'] == '#ff0000'
        assert parsed['images'][0]['dimensions'] is None
