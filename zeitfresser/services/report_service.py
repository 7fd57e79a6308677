"""
Report Generation Service using Jinja2 templates.

Architecture Decision: Template Pattern
Allows users to customize reports without changing code. The report is fed
by the same chart entries and labels a chart widget would receive.
"""

import datetime
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from jinja2 import Environment, FileSystemLoader

from zeitfresser.services.task_manager import TaskManager
from zeitfresser.utils import get_resource_path

logger = logging.getLogger(__name__)

UNIT_ABBREVIATIONS = {
    "seconds": "s",
    "minutes": "min",
    "hours": "h",
}


class ReportService:
    """
    Renders summaries of the tracked time per task.
    """

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize the report service.

        Args:
            template_dir: Directory containing Jinja2 templates
        """
        if template_dir is None:
            template_dir = get_resource_path("resources/templates")

        self.template_dir = Path(template_dir)

        # Setup Jinja2 environment
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            trim_blocks=True,
            lstrip_blocks=True
        )

        # Add custom filters
        self.env.filters['format_duration'] = self._format_duration
        self.env.filters['format_date'] = self._format_date

    @staticmethod
    def _format_duration(value: float, unit: str = "seconds") -> str:
        """Format a duration with its unit, e.g. '5.00 min'"""
        return f"{value:.2f} {UNIT_ABBREVIATIONS.get(unit, unit)}"

    @staticmethod
    def _format_date(dt: datetime.datetime, fmt: str = "%Y-%m-%d %H:%M") -> str:
        """Format datetime object"""
        return dt.strftime(fmt)

    def build_context(self, manager: TaskManager,
                      from_date: Optional[datetime.datetime] = None,
                      to_date: Optional[datetime.datetime] = None) -> Dict[str, Any]:
        """
        Collect the template variables for a date range.

        Each row carries label, task id, duration and share of the total.
        """
        tasks = manager.get_filtered_tasks(from_date, to_date)
        entries = manager.task_list_to_entry_list(tasks)
        labels = manager.task_list_to_label_list(tasks)

        total = sum(entry.duration for entry in entries)
        rows: List[Dict[str, Any]] = []
        for entry, label in zip(entries, labels):
            rows.append({
                'label': label,
                'task_id': entry.task_id,
                'duration': entry.duration,
                'share': entry.duration / total if total else 0.0,
            })

        return {
            'from_date': from_date,
            'to_date': to_date,
            'rows': rows,
            'total': total,
            'unit': manager.duration_unit,
            'generated_at': manager.clock(),
        }

    def generate_report(self, manager: TaskManager,
                        from_date: Optional[datetime.datetime] = None,
                        to_date: Optional[datetime.datetime] = None,
                        template_name: str = "summary.txt",
                        output_file: Optional[Path] = None) -> str:
        """
        Generate a report for a date range.

        Args:
            manager: The task manager holding the tasks
            from_date: Start of reporting period (optional)
            to_date: End of reporting period (optional)
            template_name: Name of the template file
            output_file: Optional file path to save the report

        Returns:
            The generated report as a string
        """
        context = self.build_context(manager, from_date, to_date)

        template = self.env.get_template(template_name)
        report_content = template.render(**context)

        if output_file:
            output_file = Path(output_file)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, 'w', encoding='utf-8') as f:
                f.write(report_content)
            logger.info(f"Report written to {output_file}")

        return report_content

    def render_template_string(self, template_string: str, **context) -> str:
        """
        Render a template from a string instead of a file.

        Args:
            template_string: The template content as a string
            **context: Variables to pass to the template

        Returns:
            The rendered content
        """
        template = self.env.from_string(template_string)
        return template.render(**context)

    def list_templates(self) -> List[str]:
        """List all available template files"""
        return sorted(f.name for f in self.template_dir.glob("*.txt")) + \
               sorted(f.name for f in self.template_dir.glob("*.md"))
