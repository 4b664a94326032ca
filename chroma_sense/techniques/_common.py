"""Helpers shared by technique modules: extractor construction and --expect checks."""

import functools
from typing import Any

from chroma_sense.core.env import get_int_setting
from chroma_sense.core.errors import ConfigError
from chroma_sense.core.extractor import PaletteExtractor
from chroma_sense.core.imaging import pil_resize
from chroma_sense.core.palette import hex_to_rgb, rgb_distance
from chroma_sense.core.types import Color, Report

# Quantization alone moves a channel by up to 15
PASS_DISTANCE = 20


def make_extractor(args: Any) -> PaletteExtractor:
    """Extractor using the --resample filter (or CHROMA_SENSE_RESAMPLE)."""
    resample = getattr(args, 'resample', None)
    return PaletteExtractor(resize=functools.partial(pil_resize, resample=resample))


def job_count(args: Any) -> int | None:
    jobs = getattr(args, 'jobs', None)
    if jobs is None:
        jobs = get_int_setting('JOBS')
    if jobs is not None and jobs < 1:
        raise ConfigError(f'worker count must be at least 1, got {jobs}')
    return jobs


def check_expected(path: str, dominant: Color, report: Report, args: Any) -> None:
    """Compare the dominant colour with --expect and record pass/fail once per image."""
    expected = getattr(args, 'expect', None)
    if not expected:
        return
    if 'expect' in report.images.get(path, {}).get('techniques', {}):
        return

    dist = rgb_distance(hex_to_rgb(expected), dominant.rgb)
    passed = dist < PASS_DISTANCE
    report.add(
        path,
        'expect',
        {
            'expected': expected,
            'actual': dominant.hex,
            'distance': round(dist, 1),
            'pass': passed,
        },
    )
    if passed:
        report.record_pass(path)
    else:
        report.record_fail(path)
