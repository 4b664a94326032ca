"""Dominant colour plus a palette of up to 5 distinct colours per image.

Each image is downsized so its longest side is at most 128px, then every
4th pixel is sampled. Pixels with alpha < 128 are ignored. Channels are
quantized to 16 levels (low 4 bits cleared) and counted.

The dominant colour is the most frequent quantized colour (#000000 when
every sampled pixel is transparent). The palette walks colours from most to
least frequent and keeps one only if it is more than 40 (RGB Euclidean)
from every colour already kept, stopping at 5.

Reports processing time per image. Use --jobs to analyse several images
in parallel and --resample to choose the downsizing filter.

Example:
    chroma-sense palette photo.jpg
    chroma-sense palette a.png b.png c.png --jobs 4 --json
"""

import time

from chroma_sense.core.extractor import PaletteExtractor
from chroma_sense.core.types import LoadedImage, PaletteResult, Report, Technique
from chroma_sense.techniques._common import check_expected, job_count, make_extractor

technique = Technique(
    name='palette',
    help='Dominant colour and up to 5 distinct palette colours per image.',
)


def _timed_extract(extractor: PaletteExtractor, image) -> tuple[PaletteResult, float]:
    start = time.perf_counter()
    result = extractor.extract(image)
    return result, (time.perf_counter() - start) * 1000.0


@technique.run
def run(images: list[LoadedImage], report: Report, args) -> None:
    extractor = make_extractor(args)
    timed = extractor.extract_many(
        [image.image for image in images],
        max_workers=job_count(args),
        fn=lambda image: _timed_extract(extractor, image),
    )

    for image, (result, elapsed_ms) in zip(images, timed):
        data = result.to_dict()
        data['elapsed_ms'] = round(elapsed_ms, 3)
        report.add(image.path, 'palette', data)
        check_expected(image.path, result.dominant, report, args)
