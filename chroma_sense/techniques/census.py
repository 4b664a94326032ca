"""Frequency table of quantized colours, most common first.

Runs the same downsize, sample and quantize steps as `palette`, but reports
the raw ranking before the distinctness filter: the top 10 colours with
sample counts and percentages of all opaque samples.

Equal counts are ordered by ascending 0xRRGGBB value, so the listing is
stable between runs.

Example:
    chroma-sense census photo.jpg
"""

from chroma_sense.core.types import LoadedImage, Report, Technique
from chroma_sense.techniques._common import make_extractor

technique = Technique(
    name='census',
    help='Ranked quantized colours with sample counts and percentages.',
)

TOP_N = 10


@technique.run
def run(images: list[LoadedImage], report: Report, args) -> None:
    extractor = make_extractor(args)
    for image in images:
        ranked = extractor.census(extractor.downscale(image.image))
        total = sum(count for _color, count in ranked)
        top = [
            {'hex': color.hex, 'count': count, 'pct': round(count / total * 100, 1)}
            for color, count in ranked[:TOP_N]
        ]
        report.add(image.path, 'census', {'top': top, 'samples': total, 'distinct': len(ranked)})
