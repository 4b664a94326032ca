"""Run every technique and combine the results into one report.

Runs: census, dominant, palette.

Example:
    chroma-sense all photo.jpg
    chroma-sense all photo.jpg --json
"""

from chroma_sense.core.types import LoadedImage, Report, Technique

technique = Technique(
    name='all',
    help='Run every technique. Combine into a single report.',
)


@technique.run
def run(images: list[LoadedImage], report: Report, args) -> None:
    from chroma_sense.registry import all_techniques

    for name, tech in sorted(all_techniques().items()):
        if name == 'all':
            continue
        tech.execute(images, report, args)
