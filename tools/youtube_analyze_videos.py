#!/usr/bin/env python3
"""
YouTube Channel Analyzer
Scores a fetched raw_data.json bundle and writes analysis.json next to it.

Usage:
    python3 tools/youtube_analyze_videos.py path/to/raw_data.json
"""

import json
import sys
from pathlib import Path

from channel_audit.engine import AnalysisConfig, analyze_channel
from channel_audit.loader import load_bundle
from channel_audit.models import InvalidBundleError


def analyze_file(data_path, config=None):
    """Analyze one raw_data.json file and return (report, analysis.json path)."""
    data_path = Path(data_path)
    print(f"📂 Loading data from: {data_path}")
    with open(data_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    report = analyze_channel(load_bundle(data), config or AnalysisConfig())

    output_file = data_path.parent / 'analysis.json'
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
    return report, output_file


def main():
    if len(sys.argv) != 2:
        print("❌ Error: Missing data file path")
        print("\nUsage:")
        print("  python3 tools/youtube_analyze_videos.py path/to/raw_data.json")
        sys.exit(1)

    data_file = sys.argv[1]
    if not Path(data_file).exists():
        print(f"❌ Error: File not found: {data_file}")
        sys.exit(1)

    try:
        _, output_file = analyze_file(data_file)
        print(f"\n📁 Analysis saved to: {output_file}")
        print("\nNext step:")
        print(f"  python3 tools/export_to_excel.py {output_file}")

    except json.JSONDecodeError as e:
        print(f"❌ Error: Invalid JSON file: {e}")
        sys.exit(1)
    except InvalidBundleError as e:
        print(f"❌ Error: Invalid data bundle: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
