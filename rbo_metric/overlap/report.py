import datetime
import html
from typing import Optional, Tuple

from ..types.types import RBOResult, Ranking
from .metrics import track_overlap, unique_ranking


def generate_overlap_report(
    first: Ranking,
    second: Ranking,
    result: RBOResult,
    output_path: str,
    names: Tuple[str, str] = ("first", "second"),
    title: Optional[str] = None,
):
    """
    Generates an HTML report for one RBO comparison.
    """
    now = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    first_name, second_name = (html.escape(str(name)) for name in names)
    heading = html.escape(title or f"{names[0]} vs {names[1]}")

    tracker = track_overlap(first, second, result.persistence)
    first_unique = unique_ranking(first)
    second_unique = unique_ranking(second)

    html_content = f"""
    <html>
    <head>
        <title>Rank-Biased Overlap Report for "{heading}"</title>
        <style>
            body {{ font-family: sans-serif; }}
            h1, h2 {{ color: #333; }}
            table {{ border-collapse: collapse; width: 100%; }}
            th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
            th {{ background-color: #f2f2f2; }}
        </style>
    </head>
    <body>
        <h1>Rank-Biased Overlap Report</h1>
        <p><strong>Comparison:</strong> {heading}</p>
        <p><strong>Persistence (p):</strong> {result.persistence}</p>
        <p><strong>Generated on:</strong> {now}</p>

        <h2>Scores</h2>
        <table>
            <tr><th>Score</th><th>Value</th></tr>
    """

    scores = {
        "min": result.min,
        "residual": result.residual,
        "upper": result.upper,
        "extrapolated": result.extrapolated,
    }
    for score_name, value in scores.items():
        html_content += f"<tr><td>{score_name}</td><td>{value:.4f}</td></tr>"

    html_content += f"""
        </table>

        <h2>Overlap by Depth</h2>
        <table>
            <tr><th>Depth</th><th>{first_name}</th><th>{second_name}</th><th>Overlap</th><th>Agreement</th></tr>
    """

    for depth, (overlap, agreement) in enumerate(
        zip(tracker.overlap_profile, tracker.agreements), start=1
    ):
        left = html.escape(str(first_unique[depth - 1])) if depth <= len(first_unique) else ""
        right = html.escape(str(second_unique[depth - 1])) if depth <= len(second_unique) else ""
        html_content += (
            f"<tr><td>{depth}</td><td>{left}</td><td>{right}</td>"
            f"<td>{overlap}</td><td>{agreement:.4f}</td></tr>"
        )

    html_content += """
        </table>
    </body>
    </html>
    """

    with open(output_path, "w") as f:
        f.write(html_content)
