#!/usr/bin/env python3
"""
Markdown Report Generator
Generates the narrative audit report from a channel audit analysis.json

Usage:
    python3 tools/generate_markdown_report.py path/to/analysis.json
"""

import json
import sys
from datetime import datetime
from pathlib import Path

from channel_audit.weights import CATEGORY_ORDER

SEVERITY_ICONS = {
    "Critical": "🚨",
    "High": "🔴",
    "Medium": "⚠️",
    "Low": "✅",
}


def grade_icon(score):
    if score >= 80:
        return "🟢"
    if score >= 60:
        return "🟡"
    return "🔴"


class MarkdownReportGenerator:
    def __init__(self, analysis):
        self.analysis = analysis
        self.channel = analysis.get('channel', {})
        self.categories = analysis.get('categories', {})
        self.coverage = analysis.get('coverage', {})

    def generate_header(self):
        generated = self.analysis.get('generatedAt', '')
        try:
            date_str = datetime.fromisoformat(generated).strftime('%B %d, %Y')
        except (TypeError, ValueError):
            date_str = datetime.now().strftime('%B %d, %Y')

        return f"""# YouTube Channel Audit Report
**Channel:** {self.channel.get('name', '')}
**Date:** {date_str}
**Videos Analyzed:** {self.coverage.get('videosAnalyzed', 0)}

---

"""

    def generate_executive_summary(self):
        score = self.analysis.get('overallScore', 0)
        grade = self.analysis.get('overallGrade', '')
        recommendations = self.analysis.get('recommendations', [])

        counts = {severity: 0 for severity in SEVERITY_ICONS}
        for rec in recommendations:
            if rec.get('priority') in counts:
                counts[rec['priority']] += 1

        text = f"""## Executive Summary

### Overall Score: {score}/100 ({grade} {grade_icon(score)})

**Quick Stats:**
- Total Subscribers: {self.channel.get('subscriberCount', 0):,}
- Total Videos: {self.channel.get('videoCount', 0):,}
- Total Views: {self.channel.get('totalViews', 0):,}
- Videos Analyzed: {self.coverage.get('videosAnalyzed', 0)} ({self.coverage.get('coveragePercent', 0)}% coverage, {self.coverage.get('confidence', 'Low')} confidence)

**Recommendations:**
"""
        for severity, icon in SEVERITY_ICONS.items():
            text += f"- {icon} {counts[severity]} {severity} Priority\n"
        return text + "\n---\n\n"

    def generate_scorecard(self):
        text = "## Scorecard\n\n| Category | Score | Rating |\n|---|---|---|\n"
        for name in self._category_names():
            score = self.categories[name].get('score', 0)
            text += f"| {name} | {score}/100 | {grade_icon(score)} |\n"
        return text + "\n---\n\n"

    def generate_key_insights(self):
        insights = self.analysis.get('insights', [])
        text = "## Key Insights\n\n"
        if not insights:
            return text + "No significant issues detected.\n\n---\n\n"

        for insight in insights:
            icon = SEVERITY_ICONS.get(insight.get('severity'), '')
            text += f"""### {icon} [{insight.get('severity', '')}] {insight.get('category', '')}: {insight.get('finding', '')}

- **Impact:** {insight.get('impact', '')}
- **Example:** {insight.get('example', '')}
- **Solution:** {insight.get('solution', '')}

"""
        return text + "---\n\n"

    def generate_action_plan(self):
        text = "## Action Plan\n\n| # | Priority | Category | Action | Impact | Time |\n|---|---|---|---|---|---|\n"
        for i, rec in enumerate(self.analysis.get('recommendations', []), 1):
            text += (
                f"| {i} | {rec.get('priority', '')} | {rec.get('category', '')} | "
                f"{rec.get('action', '')} | {rec.get('impact', '')} | {rec.get('timeInvestment', '')} |\n"
            )
        return text + "\n---\n\n"

    def generate_category_details(self):
        text = "## Category Details\n\n"
        for name in self._category_names():
            category = self.categories[name]
            text += f"### {name}: {category.get('score', 0)}/100\n\n"
            for key, value in category.get('subscores', {}).items():
                text += f"- {key}: {value}\n"
            text += "\n"

        strategy = self.categories.get('Content Strategy', {}).get('details', {})
        upload = strategy.get('uploadPattern')
        if upload:
            text += (
                f"**Upload cadence:** {upload.get('frequency', '')}, every "
                f"{upload.get('averageDaysBetween', 0):.1f} days on average\n\n"
            )
        themes = strategy.get('contentThemes', {}).get('primaryThemes', [])
        if themes:
            text += "**Primary themes:**\n"
            for theme in themes:
                text += f"- `{theme.get('theme', '')}` ({theme.get('frequency', 0)} occurrences)\n"
            text += "\n"
        return text + "---\n\n"

    def generate_top_performers(self):
        videos = sorted(self.analysis.get('videos', []), key=lambda v: v.get('views', 0), reverse=True)[:5]
        if not videos:
            return ""
        text = "## Top Performing Videos\n\n"
        for i, video in enumerate(videos, 1):
            text += (
                f"{i}. [{video.get('title', '')}]({video.get('url', '')}): "
                f"{video.get('views', 0):,} views, {video.get('engagementRate', 0)}% engagement\n"
            )
        return text + "\n---\n\n"

    def generate_footer(self):
        return """## Methodology

Scores come from fixed keyword and ratio heuristics over public video metadata.
The overall score is the unweighted mean of the category scores; the Transcript
category takes part only when transcripts were available.
"""

    def _category_names(self):
        ordered = [name for name in CATEGORY_ORDER if name in self.categories]
        return ordered + [name for name in self.categories if name not in ordered]

    def generate(self):
        print("📝 Generating report sections...")
        report = "".join([
            self.generate_header(),
            self.generate_executive_summary(),
            self.generate_scorecard(),
            self.generate_key_insights(),
            self.generate_action_plan(),
            self.generate_category_details(),
            self.generate_top_performers(),
            self.generate_footer(),
        ])
        print("✅ Report generated successfully!")
        return report


def main():
    if len(sys.argv) != 2:
        print("❌ Error: Missing analysis file")
        print("\nUsage:")
        print("  python3 tools/generate_markdown_report.py path/to/analysis.json")
        sys.exit(1)

    analysis_file = Path(sys.argv[1])

    try:
        print("📂 Loading analysis...")
        with open(analysis_file, 'r', encoding='utf-8') as f:
            analysis = json.load(f)

        report = MarkdownReportGenerator(analysis).generate()

        output_path = analysis_file.parent / 'report.md'
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(report)

        print("✅ SUCCESS!")
        print(f"📁 Report saved to: {output_path}")

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
