import shutil
import sys
from pathlib import Path

from pipeline.config import AppConfig
from pipeline.runner import run_audit_pipeline


def main():
    if len(sys.argv) < 2:
        print("Usage: python3 main.py \"CHANNEL_URL\"")
        sys.exit(1)

    channel_url = sys.argv[1]
    config = AppConfig.from_env()

    print("🚀 YouTube Channel Audit")
    print("=" * 50)

    try:
        result = run_audit_pipeline(channel_url, config, logger=print)
    except ValueError as e:
        print(f"❌ Validation Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    # Archive the human-facing outputs under reports/
    reports = Path("reports")
    reports.mkdir(exist_ok=True)
    channel_id = result["channel_id"]
    for source, target in (
        (result["markdown_path"], reports / f"{channel_id}_report.md"),
        (result["excel_path"], reports / f"{channel_id}_audit.xlsx"),
    ):
        if Path(source).exists():
            try:
                shutil.copy(source, target)
                print(f"✨ Copied to: {target}")
            except OSError as e:
                print(f"⚠️ Could not copy {source} to reports/: {e}")

    summary = result["summary"]
    print("\n✅ Audit Pipeline Complete!")
    print(f"📊 Overall Score: {summary['overall_score']}/100 ({summary['overall_grade']})")
    if result.get("sheet_url"):
        print(f"📄 Google Sheet: {result['sheet_url']}")


if __name__ == "__main__":
    main()
