"""Report builder: text and JSON output for chroma-sense results."""

import json
from typing import Any

from chroma_sense.core.types import Report


def _format_palette(data: dict[str, Any]) -> list[str]:
    lines = [f'  dominant: {data["dominant"]}']
    palette = data.get('palette', [])
    lines.append(f'  palette:  {"  ".join(palette) if palette else "(empty, no opaque pixels sampled)"}')
    if 'elapsed_ms' in data:
        lines.append(f'  time:     {data["elapsed_ms"]:.2f}ms')
    return lines


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = [f'chroma-sense: {len(report.images)} image(s)', '']

    for path, entry in report.images.items():
        dims = entry.get('dimensions')
        dim = f' ({dims[0]}×{dims[1]})' if dims else ''
        lines.append(f'── {path}{dim}')

        techniques = entry.get('techniques', {})
        for tech_name, tech_data in techniques.items():
            if tech_name == 'palette':
                lines.extend(_format_palette(tech_data))
            elif tech_name == 'dominant':
                # palette already prints the dominant colour
                if 'palette' not in techniques:
                    lines.append(f'  dominant: {tech_data["dominant"]}')
            elif tech_name == 'census':
                top = tech_data.get('top', [])[:5]
                parts = [f'{c["hex"]}:{c["pct"]:.1f}%' for c in top]
                lines.append(f'  census: {", ".join(parts) or "-"} ({tech_data.get("samples", 0)} samples)')
            elif tech_name == 'expect':
                mark = '✓' if tech_data['pass'] else '✗'
                lines.append(
                    f'  expect: {tech_data["expected"]}  got {tech_data["actual"]}  '
                    f'Δ={tech_data["distance"]}  {mark}'
                )
            else:
                for k, v in tech_data.items():
                    lines.append(f'  {tech_name}.{k}: {v}')

        lines.append('')

    total = report.pass_count + report.fail_count
    if total > 0:
        lines.append(f'PASS {report.pass_count}/{total} images  FAIL {report.fail_count}/{total} images')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {'images': []}
    for path, entry in report.images.items():
        dims = entry.get('dimensions')
        obj['images'].append(
            {
                'path': path,
                'dimensions': {'width': dims[0], 'height': dims[1]} if dims else None,
                'techniques': entry.get('techniques', {}),
            }
        )

    summary: dict[str, Any] = {
        'total': report.pass_count + report.fail_count,
        'pass': report.pass_count,
        'fail': report.fail_count,
    }
    if report.expected:
        summary['expected'] = report.expected
    obj['summary'] = summary
    return json.dumps(obj, indent=2)
