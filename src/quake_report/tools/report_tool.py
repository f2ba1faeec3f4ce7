#!/usr/bin/env python3
"""
Quake Report Tools - Games Log Report

Converts a Quake 3 Arena dedicated server games log into a JSON kill report
with one entry per game. Optionally exports a player leaderboard (CSV), an
Excel workbook and a means of death chart.
"""

import argparse
import json
import logging
import os
import sys
from typing import Dict, List, Any, Optional

from ..base import QuakeTool, JSONTool
from ..exceptions import LogParseError, LogReadError
from ..parser import Game, MeansOfDeath, parse_games
from ..report import GameReport, build_reports, leaderboard, means_of_death_totals

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_READ_ERROR = 2


class QuakeReportTool(JSONTool):
    """
    Builds per-game kill reports from a Quake 3 games log.

    The log is read into memory in one go and parsed as a whole; a log that
    does not parse produces no report at all.
    """

    DEFAULT_INDENT = 2
    DEFAULT_CHART_DPI = 150

    LEADERBOARD_HEADERS = ["Rank", "Player", "Kills", "Games"]

    def __init__(self, config: Optional[Dict[str, Any]] = None, indent: Optional[int] = None):
        """
        Initialize the report tool.

        Args:
            config: Configuration dictionary from Config class
            indent: JSON indentation, overrides report.indent from the configuration
        """
        super().__init__(config)
        self.indent = indent if indent is not None else int(self.get_config('report.indent', self.DEFAULT_INDENT))
        self.chart_dpi = int(self.get_config('report.chart_dpi', self.DEFAULT_CHART_DPI))

    def load_games(self, log_file: str) -> List[Game]:
        """
        Read and parse a games log.

        Args:
            log_file: Path to the games log

        Returns:
            Parsed games in log order

        Raises:
            LogReadError: If the file cannot be read
            LogParseError: If the log is malformed or has no complete game
        """
        text = self.read_text(log_file)
        logger.info(f"Parsing games log: {self.resolve_path(log_file)} ({len(text)} characters)")
        games = parse_games(text)
        logger.info(f"Found {len(games)} games")
        return games

    def build(self, log_file: str) -> List[GameReport]:
        """Parse a games log and aggregate one report per game."""
        reports = build_reports(self.load_games(log_file))
        self._warn_unknown_means(reports)
        return reports

    def _warn_unknown_means(self, reports: List[GameReport]):
        unknown = sorted(means for means in means_of_death_totals(reports) if not MeansOfDeath.is_known(means))
        if unknown:
            logger.warning(f"Unknown means of death in log: {', '.join(unknown)}")

    def render_json(self, reports: List[GameReport]) -> str:
        """Serialize reports to the JSON report text."""
        return json.dumps([report.to_dict() for report in reports], indent=self.indent, ensure_ascii=False)

    def export_leaderboard_csv(self, reports: List[GameReport]) -> str:
        """
        Save the player leaderboard over all games to a CSV file.

        Returns:
            Path to the saved CSV file
        """
        output_file = self.generate_timestamped_filename("quake_leaderboard", "csv")
        return self.write_csv(leaderboard(reports), output_file, headers=self.LEADERBOARD_HEADERS)

    def export_excel(self, reports: List[GameReport]) -> str:
        """
        Save the reports to an Excel workbook.

        Sheets:
            Games: one row per game
            Kills: net kills per game and player
            Means: kill count per game and means of death

        Returns:
            Path to the saved workbook
        """
        try:
            import pandas as pd
            import openpyxl
        except ImportError:
            raise ImportError("Excel export requires pandas and openpyxl. Install with: pip install pandas openpyxl")

        games_rows = []
        kills_rows = []
        means_rows = []
        for report in reports:
            top_means = max(report.kills_by_means.items(), key=lambda x: x[1])[0] if report.kills_by_means else ""
            games_rows.append({
                "game": report.index,
                "total_kills": report.total_kills,
                "players": len(report.kills),
                "top_means_of_death": top_means,
            })
            for player, count in report.kills.items():
                kills_rows.append({"game": report.index, "player": player, "kills": count})
            for means, count in report.kills_by_means.items():
                means_rows.append({"game": report.index, "means_of_death": means, "count": count})

        sheets = {
            "Games": pd.DataFrame(games_rows, columns=["game", "total_kills", "players", "top_means_of_death"]),
            "Kills": pd.DataFrame(kills_rows, columns=["game", "player", "kills"]),
            "Means": pd.DataFrame(means_rows, columns=["game", "means_of_death", "count"]),
        }

        excel_path = self.output_path_for(self.generate_timestamped_filename("quake_report", "xlsx"))
        self.ensure_dir(os.path.dirname(excel_path))

        with pd.ExcelWriter(excel_path, engine='openpyxl') as writer:
            for sheet_name, df in sheets.items():
                df.to_excel(writer, sheet_name=sheet_name, index=False)

                # Fit column widths to content
                worksheet = writer.sheets[sheet_name]
                for idx, col in enumerate(df.columns, 1):
                    max_len = max([len(str(col))] + [len(str(v)) for v in df[col]])
                    letter = openpyxl.utils.get_column_letter(idx)
                    worksheet.column_dimensions[letter].width = max_len + 2

        logger.info(f"Excel report saved to: {excel_path}")
        return excel_path

    def export_chart(self, reports: List[GameReport]) -> str:
        """
        Save a bar chart of kills per means of death over all games.

        Returns:
            Path to the saved PNG file
        """
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        totals = means_of_death_totals(reports).most_common()
        labels = [means for means, _ in reversed(totals)]
        counts = [count for _, count in reversed(totals)]

        output_path = self.output_path_for(self.generate_timestamped_filename("quake_means_of_death", "png"))
        self.ensure_dir(os.path.dirname(output_path))

        plt.figure(figsize=(10, max(3, 0.4 * len(labels) + 1)))
        plt.barh(labels, counts, color='firebrick')
        plt.xlabel('Kills')
        plt.title(f'Kills by means of death ({len(reports)} games)', fontsize=14, fontweight='bold')
        plt.tight_layout()
        plt.savefig(output_path, dpi=self.chart_dpi, facecolor='white')
        plt.close()

        logger.info(f"Means of death chart saved to: {output_path}")
        return output_path

    def run(self, log_file: str, output_file: Optional[str] = None, export_csv: bool = False,
            export_excel: bool = False, export_chart: bool = False) -> Dict[str, Any]:
        """
        Run the report generation.

        Args:
            log_file: Path to the games log
            output_file: Optional path to also write the JSON report to
            export_csv: Write the player leaderboard CSV
            export_excel: Write the Excel workbook
            export_chart: Write the means of death chart

        Returns:
            Dictionary with the reports, the JSON text and the written files

        Raises:
            LogReadError: If the log cannot be read
            LogParseError: If the log does not parse
        """
        reports = self.build(log_file)
        report_json = self.render_json(reports)

        output_files = []
        if output_file:
            output_files.append(self.write_json([r.to_dict() for r in reports], self.resolve_path(output_file),
                                               indent=self.indent))
        if export_csv:
            output_files.append(self.export_leaderboard_csv(reports))
        if export_excel:
            output_files.append(self.export_excel(reports))
        if export_chart:
            output_files.append(self.export_chart(reports))

        return {
            "game_count": len(reports),
            "kill_count": sum(r.total_kills for r in reports),
            "reports": reports,
            "json": report_json,
            "output_files": output_files,
        }


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the games log report command line tool.
    """
    parser = argparse.ArgumentParser(
        description="Convert a Quake 3 Arena games log into a JSON kill report.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s games.log
    %(prog)s games.log --output report.json --csv
    %(prog)s games.log --excel --chart --profile my_server

Configuration:
    - general.output_path: Directory for exported files
    - report.indent: JSON indentation
    - report.chart_dpi: Resolution of the means of death chart
        """
    )
    parser.add_argument("logfile", help="Path to the Quake 3 Arena games log")
    parser.add_argument("--output", help="Also write the JSON report to this file")
    parser.add_argument("--csv", action="store_true", help="Export the player leaderboard as CSV")
    parser.add_argument("--excel", action="store_true", help="Export the reports as an Excel workbook")
    parser.add_argument("--chart", action="store_true", help="Export a means of death bar chart (PNG)")
    parser.add_argument("--indent", type=int, default=None, help="JSON indentation (default: report.indent or 2)")

    QuakeTool.add_standard_arguments(parser)
    args = parser.parse_args(argv)

    config = QuakeReportTool.load_config(args.profile)
    tool = QuakeReportTool(config, indent=args.indent)

    try:
        result = tool.run(args.logfile, output_file=args.output, export_csv=args.csv,
                          export_excel=args.excel, export_chart=args.chart)
    except LogReadError as e:
        logger.error(f"Error: {e}")
        return EXIT_READ_ERROR
    except LogParseError as e:
        logger.error(f"Failed to parse log file: {e}")
        return EXIT_PARSE_ERROR

    print(result["json"])

    if args.console:
        logger.info(f"Report complete: {result['game_count']} games, {result['kill_count']} kills, "
                    f"files written: {result['output_files'] or 'none'}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
