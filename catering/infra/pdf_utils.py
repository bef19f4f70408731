import io
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from catering.utilities.formatting import format_percent, format_rupiah


def generate_pdf_for_metrics(metrics):
    """Generate a one-page PDF table of the dashboard metrics for the given window."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph("SEA Catering – Subscription Metrics", styles["Title"]),
        Paragraph(f"{metrics['start_date']} to {metrics['end_date']}", styles["Normal"]),
        Spacer(1, 16),
    ]

    data = [
        ["Metric", "Value"],
        ["New Subscriptions", str(metrics["new_subscriptions"])],
        ["Reactivations", str(metrics["reactivations"])],
        ["Subscription Growth", format_percent(metrics["subscription_growth"])],
        ["Monthly Recurring Revenue", format_rupiah(metrics["monthly_recurring_revenue"])],
        ["Average Subscription Value", format_rupiah(metrics["average_subscription_value"])],
        ["Active Subscriptions", str(metrics["total_active"])],
        ["Paused Subscriptions", str(metrics["total_paused"])],
        ["Cancelled Subscriptions", str(metrics["total_cancelled"])],
    ]

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#059669")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (1,1), (-1,-1), "RIGHT"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
