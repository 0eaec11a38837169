#!/usr/bin/env python3
"""
Excel Exporter
Creates a multi-tab Excel workbook from a channel audit analysis.json.

Usage:
    python3 tools/export_to_excel.py path/to/analysis.json [output.xlsx]
"""

import json
import sys
from datetime import datetime
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from channel_audit.weights import CATEGORY_ORDER, CATEGORY_WEIGHTS, GRADE_BANDS, LOWEST_GRADE

TITLE_FILL = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")
HEADER_FILL = PatternFill(start_color="D9D9D9", end_color="D9D9D9", fill_type="solid")
SECTION_FILL = PatternFill(start_color="EEF3F8", end_color="EEF3F8", fill_type="solid")

SEVERITY_FILLS = {
    "Critical": PatternFill(start_color="F4CCCC", end_color="F4CCCC", fill_type="solid"),
    "High": PatternFill(start_color="FCE5CD", end_color="FCE5CD", fill_type="solid"),
    "Medium": PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid"),
    "Low": PatternFill(start_color="D9EAD3", end_color="D9EAD3", fill_type="solid"),
}


def autosize_columns(worksheet, max_width=80):
    """Auto-size columns to content width with a reasonable cap."""
    widths = {}
    for row in worksheet.iter_rows():
        for cell in row:
            if cell.value is None:
                continue
            widths[cell.column] = max(widths.get(cell.column, 0), len(str(cell.value)))

    for col_idx, width in widths.items():
        worksheet.column_dimensions[get_column_letter(col_idx)].width = min(max(width + 2, 10), max_width)


def style_title_row(worksheet, end_column):
    worksheet.merge_cells(start_row=1, start_column=1, end_row=1, end_column=end_column)
    cell = worksheet.cell(row=1, column=1)
    cell.fill = TITLE_FILL
    cell.font = Font(bold=True, color="FFFFFF", size=13)
    cell.alignment = Alignment(horizontal="center", vertical="center")


def style_header_row(worksheet, row_idx, end_column):
    for col in range(1, end_column + 1):
        cell = worksheet.cell(row=row_idx, column=col)
        cell.fill = HEADER_FILL
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)


def style_section_row(worksheet, row_idx, end_column):
    for col in range(1, end_column + 1):
        cell = worksheet.cell(row=row_idx, column=col)
        cell.fill = SECTION_FILL
        cell.font = Font(bold=True)


def style_severity_column(worksheet, column, first_row):
    for row_idx in range(first_row, worksheet.max_row + 1):
        cell = worksheet.cell(row=row_idx, column=column)
        fill = SEVERITY_FILLS.get(cell.value)
        if fill:
            cell.fill = fill


def grade_rows():
    rows = []
    upper = 100
    for threshold, grade in GRADE_BANDS:
        rows.append([f"{threshold}-{upper}", grade])
        upper = threshold - 1
    rows.append([f"0-{upper}", LOWEST_GRADE])
    return rows


class ExcelExporter:
    def __init__(self, analysis):
        self.analysis = analysis
        self.channel = analysis.get("channel", {})
        self.categories = analysis.get("categories", {})
        self.videos = analysis.get("videos", [])

    def create_summary_tab(self, workbook):
        ws = workbook.create_sheet("Summary")
        coverage = self.analysis.get("coverage", {})

        rows = [
            ["YOUTUBE CHANNEL AUDIT - EXECUTIVE SUMMARY"],
            [""],
            ["Channel Information", ""],
            ["Channel Name", self.channel.get("name", "")],
            ["Subscribers", self.channel.get("subscriberCount", 0)],
            ["Total Videos", self.channel.get("videoCount", 0)],
            ["Total Views", self.channel.get("totalViews", 0)],
            [""],
            ["Audit Results", ""],
            ["Overall Score", f"{self.analysis.get('overallScore', 0)}/100"],
            ["Grade", self.analysis.get("overallGrade", "")],
            ["Videos Analyzed", coverage.get("videosAnalyzed", len(self.videos))],
            ["Coverage", f"{coverage.get('coveragePercent', 0)}%"],
            ["Confidence", coverage.get("confidence", "")],
            ["Insights", len(self.analysis.get("insights", []))],
            ["Recommendations", len(self.analysis.get("recommendations", []))],
            [""],
            ["Top 5 Recommendations", ""],
        ]
        top_row = len(rows)

        for idx, rec in enumerate(self.analysis.get("recommendations", [])[:5], 1):
            rows.append([f"{idx}. [{rec.get('priority', '')}] {rec.get('category', '')}", rec.get("action", "")])

        for row in rows:
            ws.append(row)

        style_title_row(ws, 2)
        style_section_row(ws, 3, 2)
        style_section_row(ws, 9, 2)
        style_section_row(ws, top_row, 2)
        ws.freeze_panes = "A4"
        autosize_columns(ws)

    def create_category_scores_tab(self, workbook):
        ws = workbook.create_sheet("Category Scores")
        rows = [
            ["CATEGORY SCORES"],
            [""],
            ["Category", "Score", "Subscore", "Value"],
        ]
        section_rows = []
        for name in self._category_names():
            category = self.categories[name]
            rows.append([name, category.get("score", 0), "", ""])
            section_rows.append(len(rows))
            for key, value in category.get("subscores", {}).items():
                rows.append(["", "", key, value])

        for row in rows:
            ws.append(row)

        style_title_row(ws, 4)
        style_header_row(ws, 3, 4)
        for row_idx in section_rows:
            style_section_row(ws, row_idx, 4)
        ws.freeze_panes = "A4"
        autosize_columns(ws)

    def create_scoring_methodology_tab(self, workbook):
        ws = workbook.create_sheet("Scoring Methodology")
        rows = [
            ["SCORING METHODOLOGY"],
            [""],
            ["Overall Score", "Unweighted mean of category scores (Transcript only when transcripts were analyzed)"],
            [""],
            ["Category", "Component", "Weight"],
        ]
        for name, weights in CATEGORY_WEIGHTS.items():
            for component, weight in weights.items():
                rows.append([name, component, weight])
        rows.append(["Playlist Structure", "no playlists", "fixed score 15"])
        rows.append(["Transcript", "per-video mean", "opening hook, spoken CTA, pacing, depth"])
        rows.append([""])
        grade_header = len(rows) + 1
        rows.append(["Range", "Grade"])
        rows.extend(grade_rows())

        for row in rows:
            ws.append(row)

        style_title_row(ws, 3)
        style_header_row(ws, 5, 3)
        style_header_row(ws, grade_header, 3)
        ws.freeze_panes = "A4"
        autosize_columns(ws, max_width=70)

    def create_insights_tab(self, workbook):
        ws = workbook.create_sheet("Insights")
        rows = [
            ["INSIGHTS - WHY EACH SCORE IS WHAT IT IS"],
            [""],
            ["Severity", "Category", "Finding", "Impact", "Example", "Solution"],
        ]
        for insight in self.analysis.get("insights", []):
            rows.append([
                insight.get("severity", ""),
                insight.get("category", ""),
                insight.get("finding", ""),
                insight.get("impact", ""),
                insight.get("example", ""),
                insight.get("solution", ""),
            ])
        if len(rows) == 3:
            rows.append(["Info", "", "No issues detected", "", "", ""])

        for row in rows:
            ws.append(row)

        style_title_row(ws, 6)
        style_header_row(ws, 3, 6)
        style_severity_column(ws, 1, 4)
        ws.freeze_panes = "A4"
        autosize_columns(ws, max_width=70)

    def create_action_items_tab(self, workbook):
        ws = workbook.create_sheet("Action Items")
        rows = [
            ["ACTION ITEMS - PRIORITIZED RECOMMENDATIONS"],
            [""],
            ["#", "Priority", "Category", "Action", "Expected Impact", "Time Investment"],
        ]
        for idx, rec in enumerate(self.analysis.get("recommendations", []), 1):
            rows.append([
                idx,
                rec.get("priority", ""),
                rec.get("category", ""),
                rec.get("action", ""),
                rec.get("impact", ""),
                rec.get("timeInvestment", ""),
            ])

        for row in rows:
            ws.append(row)

        style_title_row(ws, 6)
        style_header_row(ws, 3, 6)
        style_severity_column(ws, 2, 4)
        ws.freeze_panes = "A4"
        autosize_columns(ws, max_width=70)

    def create_video_performance_tab(self, workbook):
        ws = workbook.create_sheet("Video Performance")
        headers = [
            "Video URL",
            "Title",
            "Format",
            "Views",
            "Likes",
            "Comments",
            "Engagement Rate",
            "Published Date",
            "Tags Count",
            "Title Score",
            "Description Score",
            "Tags Score",
            "Thumbnail Score",
            "Issues",
        ]
        ws.append(headers)

        for video in sorted(self.videos, key=lambda v: v.get("views", 0), reverse=True):
            ws.append([
                video.get("url", ""),
                video.get("title", ""),
                video.get("format", ""),
                video.get("views", 0),
                video.get("likes", 0),
                video.get("comments", 0),
                video.get("engagementRate", 0),
                (video.get("publishedAt") or "")[:10],
                video.get("tagCount", 0),
                video.get("titleScore", 0),
                video.get("descriptionScore", 0),
                video.get("tagsScore", 0),
                video.get("thumbnailScore", 0),
                ", ".join(video.get("issues", [])),
            ])

        style_header_row(ws, 1, len(headers))
        ws.freeze_panes = "A2"
        autosize_columns(ws, max_width=70)

    def create_content_strategy_tab(self, workbook):
        ws = workbook.create_sheet("Content Strategy")
        details = self.categories.get("Content Strategy", {}).get("details", {})
        upload = details.get("uploadPattern", {})
        themes = details.get("contentThemes", {})
        formats = details.get("formatDiversity", {})
        audience = details.get("audience", {})

        rows = [
            ["CONTENT STRATEGY"],
            [""],
            ["Upload Pattern", ""],
            ["Frequency", upload.get("frequency", "")],
            ["Average Days Between Uploads", round(upload.get("averageDaysBetween", 0), 1)],
            ["Gap Std Dev (days)", round(upload.get("stdDevDays", 0), 1)],
            ["Longest Gap (days)", round(upload.get("longestGapDays", 0), 1)],
            ["Consistency Score", round(upload.get("consistencyScore", 0), 1)],
            [""],
            ["Primary Themes", "Frequency"],
        ]
        themes_header = len(rows)
        for theme in themes.get("primaryThemes", []):
            rows.append([theme.get("theme", ""), theme.get("frequency", 0)])
        rows.append([""])
        formats_header = len(rows) + 1
        rows.append(["Format Bucket", "Videos"])
        for bucket, count in formats.get("distribution", {}).items():
            rows.append([bucket, count])
        rows.append([""])
        rows.append(["Primary Audience", audience.get("primaryAudience", "")])

        for row in rows:
            ws.append(row)

        style_title_row(ws, 2)
        style_section_row(ws, 3, 2)
        style_header_row(ws, themes_header, 2)
        style_header_row(ws, formats_header, 2)
        autosize_columns(ws)

    def create_transcripts_tab(self, workbook):
        ws = workbook.create_sheet("Transcripts")
        details = self.categories.get("Transcript", {}).get("details", {})
        rows = [
            ["TRANSCRIPT ANALYSIS"],
            [""],
            ["Title", "Words", "Words/Min", "Opening Hook", "Spoken CTA", "Score"],
        ]
        for item in details.get("videos", []):
            wpm = item.get("wordsPerMinute")
            rows.append([
                item.get("title", ""),
                item.get("wordCount", 0),
                round(wpm, 1) if wpm is not None else "N/A",
                "Yes" if item.get("hasOpeningHook") else "No",
                "Yes" if item.get("hasSpokenCallToAction") else "No",
                round(item.get("score", 0), 1),
            ])
        if not details.get("videos"):
            rows.append(["Transcripts unavailable", "", "", "", "", ""])

        for row in rows:
            ws.append(row)

        style_title_row(ws, 6)
        style_header_row(ws, 3, 6)
        autosize_columns(ws, max_width=70)

    def _category_names(self):
        ordered = [name for name in CATEGORY_ORDER if name in self.categories]
        return ordered + [name for name in self.categories if name not in ordered]

    def export(self, output_path):
        output_path = Path(output_path)
        workbook = Workbook()
        workbook.remove(workbook.active)

        self.create_summary_tab(workbook)
        self.create_category_scores_tab(workbook)
        self.create_scoring_methodology_tab(workbook)
        self.create_insights_tab(workbook)
        self.create_action_items_tab(workbook)
        self.create_video_performance_tab(workbook)
        self.create_content_strategy_tab(workbook)
        self.create_transcripts_tab(workbook)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        workbook.save(output_path)
        return output_path


def main():
    if len(sys.argv) < 2 or len(sys.argv) > 3:
        print("❌ Error: Missing analysis file")
        print("\nUsage:")
        print("  python3 tools/export_to_excel.py path/to/analysis.json [output.xlsx]")
        sys.exit(1)

    analysis_file = Path(sys.argv[1])
    output_file = Path(sys.argv[2]) if len(sys.argv) == 3 else analysis_file.parent / "audit_report.xlsx"

    try:
        print("📂 Loading analysis...")
        with analysis_file.open("r", encoding="utf-8") as f:
            analysis = json.load(f)

        print("📊 Exporting to Excel workbook...")
        saved_path = ExcelExporter(analysis).export(output_file)

        print("✅ SUCCESS")
        print(f"📁 Excel file saved at: {saved_path}")
        print(f"Generated at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    except FileNotFoundError as exc:
        print(f"❌ Error: File not found: {exc}")
        sys.exit(1)
    except json.JSONDecodeError as exc:
        print(f"❌ Error: Invalid JSON file: {exc}")
        sys.exit(1)
    except Exception as exc:
        print(f"❌ Error: {exc}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
