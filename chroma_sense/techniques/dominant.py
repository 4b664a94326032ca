"""Dominant colour only, one hex value per image.

Same sampling and quantization as `palette`; skips palette reporting.
Useful with --expect/--fail-on-delta as a CI gate on brand or background
colour.

Example:
    chroma-sense dominant logo.png --expect '#f05030' --fail-on-delta 20
"""

from chroma_sense.core.types import LoadedImage, Report, Technique
from chroma_sense.techniques._common import check_expected, job_count, make_extractor

technique = Technique(
    name='dominant',
    help='Most frequent quantized colour per image. Compare against --expect.',
)


@technique.run
def run(images: list[LoadedImage], report: Report, args) -> None:
    extractor = make_extractor(args)
    results = extractor.extract_many([image.image for image in images], max_workers=job_count(args))
    for image, result in zip(images, results):
        report.add(image.path, 'dominant', {'dominant': result.dominant.hex})
        check_expected(image.path, result.dominant, report, args)
