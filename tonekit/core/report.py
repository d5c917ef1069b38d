"""Report builder: text and JSON output for tonekit results."""

import json
import math
from typing import Any

from tonekit.core.types import Report


def _swatch(color: dict[str, Any]) -> str:
    hct = color['hct']
    return f'{color["hex"]}  H={hct["h"]:.1f} C={hct["c"]:.1f} T={hct["t"]:.1f}'


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    header = f'tonekit {report.command}'
    if report.source:
        header += f': {report.source}'
    lines.append(header)
    lines.append('')

    for section, data in report.sections.items():
        lines.append(f'── {section}')

        if section == 'colors':
            if not data:
                lines.append('  (no colors extracted)')
            for i, color in enumerate(data, start=1):
                lines.append(f'  {i}. {_swatch(color)}  {color["percentage"]:5.1f}%  ({color["population"]} px)')
        elif section == 'theme':
            for role, color in data.items():
                lines.append(f'  {role:<10} {_swatch(color)}')
        elif section == 'tones':
            for role, tones in data.items():
                parts = [f'{tone}:{hex_str}' for tone, hex_str in tones.items()]
                lines.append(f'  {role:<10} {" ".join(parts)}')
        elif section == 'dislike':
            for entry in data['results']:
                mark = '✗ disliked' if entry['disliked'] else '✓'
                line = f'  {entry["input"]:<10} {mark}'
                if entry.get('fixed') and entry['fixed'] != entry['input']:
                    line += f'  → {entry["fixed"]}'
                lines.append(line)
            summary = data['summary']
            pct = summary['percentage']
            pct_text = 'n/a' if pct is None or math.isnan(pct) else f'{pct:.1f}%'
            lines.append(f'  {summary["disliked"]}/{summary["total"]} disliked ({pct_text})')
        elif section == 'distance':
            similar = 'similar' if data['similar'] else 'distinct'
            lines.append(f'  {data["metric"]}: {data["value"]:.4f} ({similar})')
        elif section == 'contrast':
            lines.append(f'  ratio: {data["ratio"]:.2f}:1')
            for level, key in (('AA', 'aa'), ('AAA', 'aaa')):
                normal = '✓ pass' if data[key] else '✗ fail'
                large = '✓ pass' if data[f'{key}_large'] else '✗ fail'
                lines.append(f'  {level:<4} normal {normal}  large {large}')
        else:
            # Generic fallback
            for k, v in data.items():
                lines.append(f'  {k}: {v}')

        lines.append('')

    return '\n'.join(lines).rstrip()


def _json_safe(value: Any) -> Any:
    # NaN is not valid JSON
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {'command': report.command}
    if report.source:
        obj['source'] = report.source
    obj.update(_json_safe(report.sections))
    return json.dumps(obj, indent=2)
