"""Extract a ranked color palette from an image.

Decodes the image, samples up to the quality tier's pixel budget, drops
near-black and near-white pixels, quantizes (Wu + weighted k-means in LAB)
and ranks the clusters by hue share and vividness with hue separation.

Quality tiers:
  low     5000 pixels,  64 clusters
  medium  10000 pixels, 128 clusters (default)
  high    25000 pixels, 256 clusters

Percentages are shares of the whole sampled population, so a short palette
does not add up to 100%.

Defaults for -q, -n and --fix-disliked come from TONEKIT_QUALITY,
TONEKIT_MAX_COLORS and TONEKIT_FIX_DISLIKED.

Example:
    tonekit extract photo.jpg -n 6 --fix-disliked
    tonekit extract photo.jpg --no-score -j
"""

from tonekit.core.env import Settings
from tonekit.core.extract import QUALITY_SETTINGS, extract_colors
from tonekit.core.types import Command, ExtractionOptions, Report
from tonekit.loader import load_image

command = Command(name='extract', help='Extract a ranked color palette from an image.')


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('image', help='Path to image (any format Pillow reads)')
    parser.add_argument('-q', '--quality', choices=sorted(QUALITY_SETTINGS), default=None, help='Quality tier')
    parser.add_argument('-n', '--max-colors', type=int, default=None, metavar='N', help='Palette size')
    parser.add_argument('--no-filter', action='store_true', help='Keep extreme tones and unsuitable colors')
    parser.add_argument('--no-score', action='store_true', help='Rank by population only')
    parser.add_argument('--fix-disliked', action='store_true', default=None, help='Lighten bile-zone colors')


@command.run
def run(args, report: Report) -> None:
    settings = getattr(args, 'settings', None) or Settings()
    options = ExtractionOptions(
        quality=args.quality or settings.quality,
        max_colors=args.max_colors if args.max_colors is not None else settings.max_colors,
        filter=not args.no_filter,
        scoring_enabled=not args.no_score,
        fix_disliked_colors=settings.fix_disliked if args.fix_disliked is None else args.fix_disliked,
    )
    colors = extract_colors(load_image(args.image), options)
    report.add('colors', [c.to_dict() for c in colors])
