#!/usr/bin/env python3
"""
Google Sheets Exporter
Writes the channel audit dashboard into a Google Sheet.

Tabs:
1. Dashboard (scores, grade, coverage, category scorecard)
2. Insights
3. Action Items (prioritized recommendations)

If the full dashboard cannot be written, a minimal score sheet is written
instead. A failed pipeline run can record its error with write_error_sheet.

Usage:
    python3 tools/export_to_sheets.py path/to/analysis.json [SHEET_ID]
"""

import json
import os
import sys
from datetime import datetime

import gspread
from dotenv import load_dotenv
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from gspread_formatting import Borders, Border, CellFormat, Color, TextFormat, batch_updater

from channel_audit.weights import CATEGORY_ORDER

load_dotenv()

SCOPES = [
    'https://www.googleapis.com/auth/spreadsheets',
    'https://www.googleapis.com/auth/drive.file'
]

DASHBOARD_TAB = "Dashboard"
INSIGHTS_TAB = "Insights"
ACTIONS_TAB = "Action Items"
FALLBACK_TAB = "Scores"
ERROR_TAB = "Audit Error"

FMT_TITLE = CellFormat(
    backgroundColor=Color(0.2, 0.3, 0.5),
    textFormat=TextFormat(bold=True, fontSize=14, foregroundColor=Color(1, 1, 1)),
    horizontalAlignment='CENTER'
)
FMT_SECTION = CellFormat(
    backgroundColor=Color(0.9, 0.9, 0.9),
    textFormat=TextFormat(bold=True, fontSize=11),
    borders=Borders(bottom=Border('SOLID'))
)
FMT_HEADER = CellFormat(
    backgroundColor=Color(0.85, 0.85, 0.85),
    textFormat=TextFormat(bold=True),
    horizontalAlignment='CENTER'
)


def score_color(score):
    if score >= 80:
        return Color(0.7, 0.9, 0.7)
    if score >= 60:
        return Color(1, 0.9, 0.6)
    return Color(1, 0.7, 0.7)


def _category_names(categories):
    ordered = [name for name in CATEGORY_ORDER if name in categories]
    return ordered + [name for name in categories if name not in ordered]


def build_dashboard_rows(analysis):
    """Rows of the Dashboard tab; section header rows are returned as 1-based indexes."""
    channel = analysis.get('channel', {})
    coverage = analysis.get('coverage', {})
    categories = analysis.get('categories', {})

    rows = [
        ["YOUTUBE CHANNEL AUDIT - DASHBOARD", ""],
        ["", ""],
        ["Channel Information", ""],
        ["Channel Name", channel.get('name', '')],
        ["Subscribers", f"{channel.get('subscriberCount', 0):,}"],
        ["Total Videos", f"{channel.get('videoCount', 0):,}"],
        ["Total Views", f"{channel.get('totalViews', 0):,}"],
        ["", ""],
        ["Audit Results", ""],
        ["Overall Score", f"{analysis.get('overallScore', 0)}/100"],
        ["Grade", analysis.get('overallGrade', '')],
        ["Videos Analyzed", coverage.get('videosAnalyzed', 0)],
        ["Coverage", f"{coverage.get('coveragePercent', 0)}%"],
        ["Confidence", coverage.get('confidence', '')],
        ["Generated At", analysis.get('generatedAt', '')],
        ["", ""],
        ["Category", "Score"],
    ]
    sections = [3, 9, 17]
    for name in _category_names(categories):
        rows.append([name, categories[name].get('score', 0)])

    rows.append(["", ""])
    rows.append(["Top 5 Recommendations", ""])
    sections.append(len(rows))
    for i, rec in enumerate(analysis.get('recommendations', [])[:5], 1):
        rows.append([f"{i}. [{rec.get('priority', '')}] {rec.get('category', '')}", rec.get('action', '')])

    return rows, sections


def build_insight_rows(analysis):
    rows = [["Severity", "Category", "Finding", "Impact", "Example", "Solution"]]
    for insight in analysis.get('insights', []):
        rows.append([
            insight.get('severity', ''),
            insight.get('category', ''),
            insight.get('finding', ''),
            insight.get('impact', ''),
            insight.get('example', ''),
            insight.get('solution', ''),
        ])
    return rows


def build_recommendation_rows(analysis):
    rows = [["#", "Priority", "Category", "Action", "Expected Impact", "Time Investment"]]
    for i, rec in enumerate(analysis.get('recommendations', []), 1):
        rows.append([
            i,
            rec.get('priority', ''),
            rec.get('category', ''),
            rec.get('action', ''),
            rec.get('impact', ''),
            rec.get('timeInvestment', ''),
        ])
    return rows


def build_fallback_rows(analysis):
    """Minimal score sheet used when the full dashboard cannot be written."""
    categories = analysis.get('categories', {})
    rows = [
        ["Channel", analysis.get('channel', {}).get('name', '')],
        ["Overall Score", analysis.get('overallScore', 0)],
        ["Grade", analysis.get('overallGrade', '')],
    ]
    for name in _category_names(categories):
        rows.append([name, categories[name].get('score', 0)])
    return rows


def build_error_rows(message, channel_url=""):
    return [
        ["AUDIT FAILED"],
        ["Channel URL", channel_url],
        ["Error", message],
        ["Failed At", datetime.now().strftime('%Y-%m-%d %H:%M:%S')],
    ]


class SheetsExporter:
    def __init__(self, credentials_path, token_path, client=None):
        self.credentials_path = credentials_path
        self.token_path = token_path
        self.client = client

    def authenticate(self):
        """Authenticate with OAuth, reusing and refreshing the stored token."""
        if self.client is not None:
            return
        print("🔐 Authenticating with Google Sheets API...")

        creds = None
        if os.path.exists(self.token_path):
            creds = Credentials.from_authorized_user_file(self.token_path, SCOPES)

        if not creds or not creds.valid:
            if creds and creds.expired and creds.refresh_token:
                print("   Refreshing expired token...")
                creds.refresh(Request())
            else:
                if not os.path.exists(self.credentials_path):
                    raise Exception(
                        f"Credentials file not found: {self.credentials_path}\n"
                        "Please download OAuth credentials from Google Cloud Console."
                    )
                print("   Opening browser for authorization...")
                flow = InstalledAppFlow.from_client_secrets_file(self.credentials_path, SCOPES)
                creds = flow.run_local_server(port=0)

            with open(self.token_path, 'w') as token:
                token.write(creds.to_json())

        self.client = gspread.authorize(creds)
        print("✅ Authentication successful!")

    def open_spreadsheet(self, sheet_id=None, channel_name=""):
        if sheet_id:
            return self.client.open_by_key(sheet_id)
        title = f"YouTube Audit - {channel_name} - {datetime.now().strftime('%Y-%m-%d')}"
        print(f"📄 Creating spreadsheet: {title}")
        return self.client.create(title)

    def replace_tab(self, spreadsheet, title, rows):
        """Clear (or create) a worksheet and write rows starting at A1."""
        width = max((len(row) for row in rows), default=1)
        try:
            worksheet = spreadsheet.worksheet(title)
            worksheet.clear()
        except gspread.exceptions.WorksheetNotFound:
            worksheet = spreadsheet.add_worksheet(title=title, rows=max(len(rows), 1) + 10, cols=max(width, 2))
        worksheet.update(range_name='A1', values=rows)
        return worksheet

    def batch_format(self, worksheet, format_list):
        """Apply (range, CellFormat) pairs in one request; styling failures are reported, not raised."""
        if not format_list:
            return
        try:
            with batch_updater(worksheet.spreadsheet) as batch:
                for range_name, cell_format in format_list:
                    batch.format_cell_range(worksheet, range_name, cell_format)
        except Exception as e:
            print(f"⚠️ Formatting skipped for {worksheet.title}: {e}")

    def write_dashboard(self, spreadsheet, analysis):
        print("   Creating Dashboard tab...")
        rows, sections = build_dashboard_rows(analysis)
        worksheet = self.replace_tab(spreadsheet, DASHBOARD_TAB, rows)

        formats = [('A1:B1', FMT_TITLE)]
        formats.extend((f'A{row}:B{row}', FMT_SECTION) for row in sections)
        formats.append(('B10', CellFormat(
            backgroundColor=score_color(analysis.get('overallScore', 0)),
            textFormat=TextFormat(bold=True, fontSize=12)
        )))
        self.batch_format(worksheet, formats)

        print("   Creating Insights tab...")
        worksheet = self.replace_tab(spreadsheet, INSIGHTS_TAB, build_insight_rows(analysis))
        self.batch_format(worksheet, [('A1:F1', FMT_HEADER)])

        print("   Creating Action Items tab...")
        worksheet = self.replace_tab(spreadsheet, ACTIONS_TAB, build_recommendation_rows(analysis))
        self.batch_format(worksheet, [('A1:F1', FMT_HEADER)])

    def export(self, analysis, sheet_id=None):
        """Write the dashboard; fall back to a minimal score sheet if that fails."""
        self.authenticate()
        spreadsheet = self.open_spreadsheet(sheet_id, analysis.get('channel', {}).get('name', ''))

        try:
            self.write_dashboard(spreadsheet, analysis)
        except Exception as e:
            print(f"⚠️ Dashboard write failed ({e}); writing minimal score sheet")
            self.replace_tab(spreadsheet, FALLBACK_TAB, build_fallback_rows(analysis))

        print("   ✅ Sheet updated")
        return spreadsheet.url

    def write_error_sheet(self, sheet_id, message, channel_url=""):
        self.authenticate()
        spreadsheet = self.client.open_by_key(sheet_id)
        worksheet = self.replace_tab(spreadsheet, ERROR_TAB, build_error_rows(message, channel_url))
        self.batch_format(worksheet, [('A1:B1', FMT_TITLE)])
        return spreadsheet.url


def main():
    if len(sys.argv) not in (2, 3):
        print("❌ Error: Missing analysis file")
        print("\nUsage:")
        print("  python3 tools/export_to_sheets.py path/to/analysis.json [SHEET_ID]")
        sys.exit(1)

    analysis_file = sys.argv[1]
    sheet_id = sys.argv[2] if len(sys.argv) == 3 else os.getenv('GOOGLE_SHEET_ID')

    credentials_path = os.getenv('GOOGLE_CREDENTIALS_PATH', 'credentials.json')
    token_path = os.getenv('GOOGLE_TOKEN_PATH', 'token.json')

    try:
        print("📂 Loading analysis...")
        with open(analysis_file, 'r', encoding='utf-8') as f:
            analysis = json.load(f)

        print("\n🚀 Exporting to Google Sheets...")
        print("=" * 50)
        url = SheetsExporter(credentials_path, token_path).export(analysis, sheet_id)

        print("\n" + "=" * 50)
        print("✅ SUCCESS!")
        print("\n📊 Google Sheets URL:")
        print(url)

    except FileNotFoundError as e:
        print(f"❌ Error: File not found: {e}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"❌ Error: Invalid JSON file: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
