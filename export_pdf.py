import asyncio
import sys
from datetime import date, timedelta
from typing import BinaryIO, Optional, Union

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, Spacer, Table, TableStyle
from reportlab.platypus.doctemplate import BaseDocTemplate, PageTemplate
from reportlab.platypus.frames import Frame

import config
from collect import MockDataSource
from errors import DataSourceError
from process import aggregate_activity, rank_tags, recent_submissions
from structs import PLATFORMS, DashboardData
from utils import check_count, current_date

HEADER_STYLE = [
    ('BACKGROUND', (0, 0), (-1, 0), colors.lightgrey),
    ('TEXTCOLOR', (0, 0), (-1, 0), colors.black),
    ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
    ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
    ('BOTTOMPADDING', (0, 0), (-1, 0), 12),
    ('BACKGROUND', (0, 1), (-1, -1), colors.white),
    ('GRID', (0, 0), (-1, -1), 1, colors.black),
]


class PDFWithFooter(BaseDocTemplate):
    """Document template with footer on each page"""

    def __init__(self, filename, footer_text, date_range=None, **kwargs):
        BaseDocTemplate.__init__(self, filename, **kwargs)
        self.footer_text = footer_text
        self.date_range = date_range
        self.page_width, self.page_height = A4

        frame = Frame(
            self.leftMargin,
            self.bottomMargin,
            self.width,
            self.height - 0.5*inch,
            id='normal'
        )

        template = PageTemplate(
            id='with_footer',
            frames=frame,
            onPage=self.add_footer
        )

        self.addPageTemplates([template])

    def add_footer(self, canvas, doc):
        canvas.saveState()
        canvas.setFont('Helvetica-Oblique', 8)

        footer_y = 0.25*inch
        canvas.drawCentredString(self.page_width/2.0, footer_y, self.footer_text)

        if self.date_range:
            canvas.setFont('Helvetica', 8)
            canvas.drawRightString(self.page_width - 0.5*inch, footer_y, f"Period: {self.date_range}")

        canvas.restoreState()


def _table(rows, col_widths, extra_style=()):
    table = Table(rows, colWidths=col_widths)
    table.setStyle(TableStyle(HEADER_STYLE + list(extra_style)))
    return table


def generate_pdf_report(
    data: DashboardData,
    output: Union[str, BinaryIO],
    days: int = config.ACTIVITY_DAYS,
    today: Optional[date] = None,
):
    """Render the dashboard view of ``data`` into ``output`` (path or binary stream)."""
    check_count("days", days)
    today = today or current_date()
    activity = aggregate_activity(data.activities, days=days, today=today)
    top_tags = rank_tags(data.tag_stats)
    latest = recent_submissions(data.submissions)

    start = today - timedelta(days=max(days - 1, 0))
    date_range_text = f"{start.strftime('%d/%m/%Y')} - {today.strftime('%d/%m/%Y')}"
    footer_text = "This report was automatically generated and is for informational purposes only."

    doc = PDFWithFooter(
        output,
        footer_text,
        date_range=date_range_text,
        pagesize=A4,
        rightMargin=0.5*inch,
        leftMargin=0.5*inch,
        topMargin=0.5*inch,
        bottomMargin=0.75*inch
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'Title',
        parent=styles['Heading1'],
        fontSize=22,
        alignment=TA_CENTER,
        spaceAfter=6
    )
    section_style = ParagraphStyle(
        'Section',
        parent=styles['Heading2'],
        fontSize=14,
        alignment=TA_LEFT,
        spaceAfter=6
    )
    normal_style = styles["Normal"]

    elements = [Paragraph("Competitive Programming Dashboard", title_style), Spacer(1, 0.2*inch)]

    elements.append(Paragraph("Platform Stats", section_style))
    if data.platform_stats:
        stats_rows = [["Platform", "Solved", "Rating", "Rank", "Easy", "Medium", "Hard", "Streak"]]
        for stats in data.platform_stats:
            stats_rows.append([
                stats.platform.capitalize(),
                str(stats.totalSolved),
                str(stats.rating) if stats.rating is not None else "N/A",
                (stats.rank or "N/A").replace("★", "*"),
                str(stats.easyCount),
                str(stats.mediumCount),
                str(stats.hardCount),
                f"{stats.streak} days",
            ])
        elements.append(_table(stats_rows, [1.1*inch, 0.8*inch, 0.8*inch, 1.6*inch, 0.7*inch, 0.8*inch, 0.7*inch, 0.8*inch]))
    else:
        elements.append(Paragraph("No platform stats available", normal_style))
    elements.append(Spacer(1, 0.3*inch))

    elements.append(Paragraph(f"Daily Activity (last {days} days)", section_style))
    active = [point for point in activity if point.total > 0]
    if active:
        activity_rows = [["Date", *(p.capitalize() for p in PLATFORMS), "Total"]]
        for point in active:
            activity_rows.append([
                date.fromisoformat(point.date).strftime("%d %b %Y"),
                *(str(getattr(point, p)) for p in PLATFORMS),
                str(point.total),
            ])
        elements.append(_table(activity_rows, [1.5*inch, 1.3*inch, 1.3*inch, 1.3*inch, 1*inch]))
    else:
        elements.append(Paragraph("No activity data available for the selected period", normal_style))
    elements.append(Spacer(1, 0.3*inch))

    elements.append(Paragraph("Top Tags", section_style))
    if top_tags:
        tag_rows = [["Tag", "Problems", "Success Rate"]]
        for tag in top_tags:
            tag_rows.append([tag.tag, str(tag.count), f"{tag.successRate:.1f}%"])
        elements.append(_table(tag_rows, [3*inch, 1.5*inch, 1.5*inch], [('ALIGN', (0, 0), (0, -1), 'LEFT')]))
    else:
        elements.append(Paragraph("No tag data available", normal_style))
    elements.append(Spacer(1, 0.3*inch))

    elements.append(Paragraph("Recent Submissions", section_style))
    if latest:
        submission_rows = [["Date", "Problem", "Platform", "Status", "Language"]]
        for submission in latest:
            submission_rows.append([
                submission.submitted_at.strftime("%b %d, %Y %H:%M"),
                submission.problemTitle,
                submission.platform,
                submission.status,
                submission.language,
            ])
        elements.append(_table(
            submission_rows,
            [1.4*inch, 2*inch, 1*inch, 1.6*inch, 1*inch],
            [('ALIGN', (1, 0), (1, -1), 'LEFT')],
        ))
    else:
        elements.append(Paragraph("No recent submissions found", normal_style))

    doc.build(elements)


def main():
    if len(sys.argv) > 2:
        print("Usage: python export_pdf.py [days]")
        sys.exit(1)

    try:
        days = check_count("days", int(sys.argv[1])) if len(sys.argv) == 2 else config.ACTIVITY_DAYS
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    config.configure_logging()
    print(f"Fetching dashboard data for {len(PLATFORMS)} platforms")
    try:
        data = asyncio.run(MockDataSource().fetch_dashboard())
    except DataSourceError as e:
        print(f"Error fetching data: {e}")
        sys.exit(1)

    today = current_date()
    output_filename = f"dashboard_report_{today.strftime('%d%m%Y')}.pdf"
    generate_pdf_report(data, output_filename, days=days, today=today)
    print(f"PDF report generated successfully: {output_filename}")


if __name__ == "__main__":
    main()
