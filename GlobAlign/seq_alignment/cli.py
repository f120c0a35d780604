"""
Command-line front end: globalign S1 S2 MATCH MISMATCH GAP
"""
import argparse
import sys
from typing import List, Optional

import matplotlib.pyplot as plt

from .display import format_matrix, plot_matrix
from .pairwise import GlobalAligner, traceback_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="globalign",
        description="Optimal global alignment of two strings (Needleman-Wunsch, linear gap)."
    )
    parser.add_argument("s1", help="First sequence")
    parser.add_argument("s2", help="Second sequence")
    parser.add_argument("match", type=int, help="Score for a matching pair")
    parser.add_argument("mismatch", type=int, help="Score for a mismatching pair")
    parser.add_argument("gap", type=int, help="Score per gap position (usually negative)")
    parser.add_argument("--method", choices=["iterative", "recursive"], default="iterative",
                        help="Matrix fill strategy (default: iterative)")
    parser.add_argument("--no-matrix", action="store_true",
                        help="Do not print the completed score matrix")
    parser.add_argument("--plot", metavar="FILE",
                        help="Save a heatmap of the score matrix with the traceback path")
    parser.add_argument("--width", type=int, default=6,
                        help="Field width of matrix cells (default: 6)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Report progress")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    print(f"match: {args.match}")
    print(f"mismatch: {args.mismatch}")
    print(f"gap: {args.gap}")

    aligner = GlobalAligner(args.match, args.mismatch, args.gap, method=args.method)
    result = aligner.align(args.s1, args.s2, verbose=args.verbose)

    print(f"The optimal alignment score between {args.s1} and {args.s2} is {result.score}")

    if not args.no_matrix:
        print()
        print("The completed score matrix:")
        print()
        print(format_matrix(result.matrix, args.s1, args.s2, field_width=args.width))

    if args.plot:
        fig = plot_matrix(
            result.matrix, args.s1, args.s2,
            path=traceback_path(result.matrix, args.gap),
            title=f"score = {result.score}"
        )
        fig.savefig(args.plot)
        plt.close(fig)
        print(f"Score matrix plot saved to {args.plot}", file=sys.stderr)

    print("The aligned strings:")
    print(result.seq1_aligned)
    print(result.seq2_aligned)
    return 0


if __name__ == "__main__":
    sys.exit(main())
