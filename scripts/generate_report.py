"""
Script to print a time summary for the tasks in a YAML task file.

Usage:
    python scripts/generate_report.py tasks.yaml [--from 2026-10-01] [--to 2026-10-31] [--output report.txt]
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from zeitfresser.domain.errors import InvalidArgument
from zeitfresser.infra.config import get_settings
from zeitfresser.infra.task_lists import yaml_task_list
from zeitfresser.services.report_service import ReportService
from zeitfresser.services.task_manager import TaskManager


def main():
    parser = argparse.ArgumentParser(description="Print a time summary for a task file")
    parser.add_argument("tasks_file", type=Path)
    parser.add_argument("--from", dest="from_date", type=datetime.fromisoformat)
    parser.add_argument("--to", dest="to_date", type=datetime.fromisoformat)
    parser.add_argument("--output", type=Path)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    prefs = get_settings().preferences
    try:
        manager = TaskManager(yaml_task_list(args.tasks_file), duration_unit=prefs.duration_unit)
    except InvalidArgument as e:
        print(f"Error: {e}")
        sys.exit(1)

    service = ReportService()
    print(service.generate_report(
        manager,
        from_date=args.from_date,
        to_date=args.to_date,
        template_name=prefs.report_template,
        output_file=args.output,
    ))


if __name__ == "__main__":
    main()
