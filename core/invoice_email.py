"""
HTML invoice email.

Renders an invoice with its items into a table-based HTML document that mail
clients display consistently. Every value that comes from the database is
HTML-escaped before interpolation.
"""

from dataclasses import dataclass
from decimal import Decimal
from html import escape

from core.models import CompanyProfile, DiscountType, InvoiceDetail
from utils.money import format_money
from utils.timezone import format_display_date

ACCENT = "#EE2B2B"

_TH = (
    "padding:12px 16px;background:{accent};color:#fff;font-size:12px;"
    "text-transform:uppercase;letter-spacing:1px;text-align:{align}"
)
_TD = "padding:12px 16px;border-bottom:1px solid #eee;font-size:14px;color:#333;text-align:{align}"
_LABEL = "margin:0;font-size:11px;text-transform:uppercase;letter-spacing:1.5px;color:#999"
_MUTED = "margin:2px 0 0;font-size:13px;color:#777"


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str


def _format_percent(value: Decimal) -> str:
    """10.0000 -> '10', 12.5000 -> '12.5'."""
    return format(Decimal(value).normalize(), "f")


def _muted_lines(*values: str | None) -> str:
    return "".join(
        f'<p style="{_MUTED}">{escape(value)}</p>' for value in values if value
    )


def _items_rows(detail: InvoiceDetail, symbol: str) -> str:
    rows = []
    for item in detail.items:
        rows.append(
            "<tr>"
            f'<td style="{_TD.format(align="left")}">{escape(item.description)}</td>'
            f'<td style="{_TD.format(align="center")}">{item.quantity}</td>'
            f'<td style="{_TD.format(align="right")}">{format_money(item.rate_cents, symbol)}</td>'
            f'<td style="{_TD.format(align="right")}">{format_money(item.amount_cents, symbol)}</td>'
            "</tr>"
        )
    return "".join(rows)


def _totals_rows(detail: InvoiceDetail, symbol: str) -> str:
    def row(label: str, amount: str, color: str = "#333") -> str:
        return (
            "<tr>"
            f'<td style="padding:6px 0;font-size:14px;color:{color}">{label}</td>'
            f'<td style="padding:6px 0;font-size:14px;color:{color};text-align:right">{amount}</td>'
            "</tr>"
        )

    rows = [row("Subtotal", format_money(detail.subtotal_cents, symbol))]

    if detail.discount_cents > 0:
        label = "Discount"
        if detail.discount_type == DiscountType.PERCENTAGE:
            label += f" ({_format_percent(detail.discount_value)}%)"
        rows.append(row(label, "-" + format_money(detail.discount_cents, symbol), "#22c55e"))

    if detail.tax_cents > 0:
        rows.append(row(
            f"Tax ({_format_percent(detail.tax_percentage)}%)",
            format_money(detail.tax_cents, symbol),
        ))

    rows.append(
        "<tr>"
        '<td style="padding:8px 0;font-size:18px;font-weight:800;color:#222">Total</td>'
        '<td style="padding:8px 0;font-size:18px;font-weight:800;color:#222;text-align:right">'
        f"{format_money(detail.total_cents, symbol)}</td>"
        "</tr>"
    )

    if detail.amount_paid_cents > 0:
        rows.append(row("Amount paid", format_money(detail.amount_paid_cents, symbol)))
        rows.append(row("Balance due", format_money(detail.balance_due_cents, symbol)))

    return "".join(rows)


def render_invoice_email(detail: InvoiceDetail, company: CompanyProfile) -> RenderedEmail:
    """
    Build subject and HTML body for an invoice email.

    Args:
        detail: Invoice with items (payments are not shown)
        company: Company details for header and footer

    Returns:
        RenderedEmail with subject "Invoice <number> from <company>"
    """
    symbol = company.currency_symbol
    company_name = escape(company.name)
    invoice_number = escape(detail.invoice_number)

    due_line = ""
    if detail.due_date:
        due_line = f'<p style="{_MUTED}">Due: {format_display_date(detail.due_date)}</p>'

    notes_block = ""
    if detail.notes:
        notes_block = (
            '<tr><td style="padding:0 40px 20px">'
            f'<p style="{_LABEL}">Notes</p>'
            f'<p style="margin:8px 0 0;font-size:13px;color:#666;line-height:1.6">{escape(detail.notes)}</p>'
            "</td></tr>"
        )

    contact_footer = ""
    if company.email:
        contact_footer = escape(company.email)
        if company.phone:
            contact_footer += f" | {escape(company.phone)}"
        contact_footer = f'<p style="margin:8px 0 0;font-size:12px;color:#999">{contact_footer}</p>'

    headers = "".join(
        f'<th style="{_TH.format(accent=ACCENT, align=align)}">{title}</th>'
        for title, align in (("Description", "left"), ("Qty", "center"), ("Rate", "right"), ("Amount", "right"))
    )

    html = f"""<table cellpadding="0" cellspacing="0" border="0" width="100%" style="max-width:680px;margin:0 auto;font-family:Arial,sans-serif;background:#ffffff">
<tr><td style="height:6px;background:{ACCENT}"></td></tr>
<tr><td style="padding:36px 40px 0">
<table cellpadding="0" cellspacing="0" border="0" width="100%"><tr>
<td style="vertical-align:top">
<h1 style="margin:0;font-size:36px;font-weight:800;color:#222">Invoice</h1>
<p style="margin:12px 0 0;font-size:16px;font-weight:700;color:#333">{company_name}</p>
{_muted_lines(company.address, company.email, company.phone)}
</td>
<td style="vertical-align:top;text-align:right">
<p style="{_LABEL}">Invoice No.</p>
<p style="margin:4px 0 0;font-size:20px;font-weight:700;color:{ACCENT}">{invoice_number}</p>
<p style="{_MUTED}">Date: {format_display_date(detail.created_at)}</p>
{due_line}
</td>
</tr></table>
</td></tr>
<tr><td style="padding:20px 40px">
<table cellpadding="0" cellspacing="0" border="0" width="100%" style="background:#f9f9f9"><tr><td style="padding:20px">
<p style="{_LABEL}">Bill To</p>
<p style="margin:8px 0 0;font-size:16px;font-weight:700;color:#333">{escape(detail.client_name)}</p>
{_muted_lines(detail.client_email, detail.client_phone, detail.client_address)}
</td></tr></table>
</td></tr>
<tr><td style="padding:0 40px">
<table cellpadding="0" cellspacing="0" border="0" width="100%" style="border-collapse:collapse">
<thead><tr>{headers}</tr></thead>
<tbody>{_items_rows(detail, symbol)}</tbody>
</table>
</td></tr>
<tr><td style="padding:20px 40px">
<table cellpadding="0" cellspacing="0" border="0" width="280" align="right">{_totals_rows(detail, symbol)}</table>
</td></tr>
{notes_block}
<tr><td style="padding:24px 40px;border-top:3px solid {ACCENT};background:#fafafa;text-align:center">
<p style="margin:0;font-size:14px;font-weight:700;color:#333">{company_name}</p>
<p style="margin:4px 0 0;font-size:12px;color:#999">Thank you for your business</p>
{contact_footer}
</td></tr>
<tr><td style="height:6px;background:{ACCENT}"></td></tr>
</table>"""

    return RenderedEmail(
        subject=f"Invoice {detail.invoice_number} from {company.name}",
        html=html,
    )
