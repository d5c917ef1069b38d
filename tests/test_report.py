"""Tests for tonekit.core.report: text and JSON formatting."""

import json

from tonekit.core.report import format_json, format_text
from tonekit.core.types import Report

RED = {
    'hex': '#ff0000',
    'rgb': {'r': 255, 'g': 0, 'b': 0},
    'hct': {'h': 40.0, 'c': 104.5, 't': 53.24},
    'population': 30,
    'percentage': 75.0,
}


class TestFormatText:
    def test_header(self):
        assert format_text(Report(command='extract', source='a.png')).startswith('tonekit extract: a.png')

    def test_colors(self):
        report = Report(command='extract', source='a.png')
        report.add('colors', [RED])
        text = format_text(report)
        assert '── colors' in text
        assert '1. #ff0000  H=40.0 C=104.5 T=53.2   75.0%  (30 px)' in text

    def test_no_colors(self):
        report = Report(command='extract')
        report.add('colors', [])
        assert '(no colors extracted)' in format_text(report)

    def test_theme_and_tones(self):
        report = Report(command='theme')
        report.add('theme', {'primary': RED})
        report.add('tones', {'primary': {'10': '#410000', '90': '#ffdad4'}})
        text = format_text(report)
        assert 'primary    #ff0000' in text
        assert '10:#410000 90:#ffdad4' in text

    def test_dislike_empty_percentage(self):
        report = Report(command='dislike')
        report.add('dislike', {'results': [], 'summary': {'total': 0, 'disliked': 0, 'percentage': float('nan')}})
        assert '0/0 disliked (n/a)' in format_text(report)

    def test_contrast(self):
        report = Report(command='contrast', source='#767676 on #ffffff')
        report.add('contrast', {'ratio': 4.54, 'aa': True, 'aa_large': True, 'aaa': False, 'aaa_large': True})
        text = format_text(report)
        assert '  ratio: 4.54:1' in text
        assert '  AA   normal ✓ pass  large ✓ pass' in text
        assert '  AAA  normal ✗ fail  large ✓ pass' in text

    def test_generic_section(self):
        report = Report(command='convert')
        report.add('convert', {'hex': '#ff0000'})
        assert '  hex: #ff0000' in format_text(report)


class TestFormatJson:
    def test_sections_at_top_level(self):
        report = Report(command='extract', source='a.png')
        report.add('colors', [RED])
        obj = json.loads(format_json(report))
        assert obj == {'command': 'extract', 'source': 'a.png', 'colors': [RED]}

    def test_nan_becomes_null(self):
        report = Report(command='dislike')
        report.add('dislike', {'summary': {'percentage': float('nan')}})
        obj = json.loads(format_json(report))
        assert obj['dislike']['summary']['percentage'] is None

    def test_no_source(self):
        assert 'source' not in json.loads(format_json(Report(command='convert')))
