"""
Report renderer: turns already-authorized rows into CSV text or a PDF document.
"""
import csv
import io
from datetime import date
from typing import Optional, Sequence

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.pdfgen import canvas

from app.models.evaluation import Evaluation
from app.models.goal import Goal
from app.models.user import User
from app.schemas.dashboard import ReportRow

CSV_HEADER = [
    "Employee",
    "Department",
    "Goal Title",
    "Status",
    "Achievement Rating",
    "Overall Evaluation Score",
]


def render_csv(rows: Sequence[ReportRow]) -> str:
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for row in rows:
        writer.writerow([
            row.employee,
            row.department,
            row.goal_title,
            row.status,
            row.achievement_rating,
            row.overall_evaluation_score,
        ])
    return output.getvalue()


class _PdfWriter:
    """Top-to-bottom text layout with automatic page breaks."""

    def __init__(self, buffer: io.BytesIO, title: str):
        self.canvas = canvas.Canvas(buffer, pagesize=A4)
        self.canvas.setTitle(title)
        self.width, self.height = A4
        self.margin = 2 * cm
        self.y = self.height - self.margin

    def line(self, text: str, size: int = 10, indent: float = 0, centered: bool = False):
        leading = size * 1.5
        if self.y - leading < self.margin:
            self.canvas.showPage()
            self.y = self.height - self.margin
        self.canvas.setFont("Helvetica", size)
        if centered:
            self.canvas.drawCentredString(self.width / 2, self.y, text)
        else:
            self.canvas.drawString(self.margin + indent, self.y, text)
        self.y -= leading

    def gap(self, amount: float = 0.5 * cm):
        self.y -= amount

    def save(self):
        self.canvas.showPage()
        self.canvas.save()


def render_user_pdf(
    user: User,
    goals: Sequence[Goal],
    evaluations: Sequence[Evaluation],
    generated_on: Optional[date] = None,
) -> bytes:
    buffer = io.BytesIO()
    pdf = _PdfWriter(buffer, title=f"Performance report - {user.name}")

    pdf.line("Performance Appraisal Report", size=20, centered=True)
    pdf.gap()
    pdf.line(f"Employee: {user.name}", size=12)
    pdf.line(f"Department: {user.department or '-'}", size=12)
    pdf.line(f"Generated: {(generated_on or date.today()).isoformat()}", size=12)
    pdf.gap()

    pdf.line("Goals Summary", size=16)
    for goal in goals:
        pdf.line(f"- {goal.title} - {goal.status.value}")
        if goal.achievement_rating:
            pdf.line(f"Rating: {goal.achievement_rating}/5", indent=12)
    pdf.gap()

    pdf.line("Performance Evaluations", size=16)
    for evaluation in evaluations:
        pdf.line(f"Review Period: {evaluation.review_period} ({evaluation.evaluation_type.value})")
        if evaluation.overall_score:
            pdf.line(f"Overall Score: {evaluation.overall_score:g}/5", indent=12)

    pdf.save()
    return buffer.getvalue()
