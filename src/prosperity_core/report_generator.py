"""Report rendering for proposals and client financial reports.

Both generators collect report sections as plain text blocks, then format
them as text, Markdown or HTML. PDF output is laid out separately with
reportlab tables.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from html import escape
from io import BytesIO
from typing import Optional, Union

import structlog
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .catalog import display_name
from .config import ProjectionSettings, ReportFormat, ReportSettings
from .exceptions import ReportError
from .formatting import format_currency, format_percentage
from .models import AdvisorProfile, ClientProfile, LineItem, ProjectionResult, Proposal
from .projection import ProposalProjectionCalculator
from .report import FinancialReport

logger = structlog.get_logger()

PROPOSAL_DISCLAIMER = (
    "These projections are based on current assumptions and projected rates of return with "
    "annual COI/Fee deductions. Actual results may vary based on market conditions, policy "
    "performance, and other factors. Please consult with your financial professional before "
    "making any investment decisions."
)

REPORT_DISCLAIMER = (
    "This report is based on the information provided and is intended for educational and "
    "informational purposes only. It does not constitute financial, legal, or tax advice. "
    "Please consult with qualified professionals before making financial decisions. "
    "{firm}™ is not responsible for any actions taken based on this report."
)

HEADER_BLUE = colors.HexColor("#1a365d")
SECTION_BLUE = colors.HexColor("#2c5282")


@dataclass
class ReportSection:
    """A titled block of report text."""

    title: str
    content: str


def _resolve_format(format: Union[str, ReportFormat, None], default: ReportFormat) -> ReportFormat:
    if format is None:
        return default
    try:
        return ReportFormat(format.lower() if isinstance(format, str) else format)
    except ValueError:
        raise ReportError(
            f"Unsupported report format: {format}",
            format=str(format),
            details={"supported": [f.value for f in ReportFormat]},
        ) from None


def _pdf_styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name="ReportTitle",
        parent=styles["Heading1"],
        fontSize=18,
        spaceAfter=20,
        alignment=TA_CENTER,
        textColor=HEADER_BLUE,
    ))
    styles.add(ParagraphStyle(
        name="SectionHeading",
        parent=styles["Heading2"],
        fontSize=14,
        spaceAfter=12,
        spaceBefore=20,
        textColor=SECTION_BLUE,
    ))
    styles.add(ParagraphStyle(
        name="Disclaimer",
        parent=styles["Normal"],
        fontSize=8,
        textColor=colors.grey,
        alignment=TA_CENTER,
    ))
    return styles


def _key_value_table(rows: list[list[str]], label_width: float = 2.5) -> Table:
    table = Table(rows, colWidths=[label_width * inch, 2.5 * inch])
    table.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
        ("FONTNAME", (1, 0), (1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("ALIGN", (0, 0), (0, -1), "RIGHT"),
        ("ALIGN", (1, 0), (1, -1), "LEFT"),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]))
    return table


def _grid_table(header: list[str], rows: list[list[str]], col_widths: list[float]) -> Table:
    table = Table([header] + rows, colWidths=[w * inch for w in col_widths])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), SECTION_BLUE),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 10),
        ("ALIGN", (-1, 0), (-1, -1), "RIGHT"),
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 1), (-1, -1), 9),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    return table


def _render_pdf(elements: list) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        rightMargin=0.75 * inch,
        leftMargin=0.75 * inch,
        topMargin=0.75 * inch,
        bottomMargin=0.75 * inch,
    )
    doc.build(elements)
    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes


class _SectionedReportGenerator(ABC):
    """Shared text, Markdown and HTML layout."""

    document_title = "Report"

    def __init__(self, settings: Optional[ReportSettings] = None):
        self.settings = settings or ReportSettings()
        self._sections: list[ReportSection] = []

    @property
    def footer(self) -> str:
        return f"Generated by {self.settings.firm_name}"

    @abstractmethod
    def _disclaimer(self) -> str:
        """Disclaimer printed after the last section."""

    def _format_text(self) -> str:
        output = []
        for section in self._sections:
            if section.title != "Header":
                output.append("")
                output.append("=" * 60)
                output.append(section.title.upper())
                output.append("=" * 60)
            output.append(section.content)

        output.append("")
        output.append("=" * 60)
        output.append("END OF REPORT")
        output.append("=" * 60)
        output.append("")
        output.append(f"DISCLAIMER: {self._disclaimer()}")
        output.append("")
        output.append(self.footer)
        return "\n".join(output)

    def _format_markdown(self) -> str:
        output = []
        for section in self._sections:
            if section.title == "Header":
                output.append(f"# {self.document_title}\n")
                output.append("```")
            else:
                output.append(f"\n## {section.title}\n")
                output.append("```")
            output.append(section.content)
            output.append("```")

        output.append("\n---\n")
        output.append(f"**DISCLAIMER:** {self._disclaimer()}\n")
        output.append(f"*{self.footer}*")
        return "\n".join(output)

    def _format_html(self) -> str:
        lines = [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            f"<title>{escape(self.document_title)}</title>",
            "<style>",
            "body { font-family: 'Courier New', monospace; margin: 40px; }",
            "h2 { color: #2c5282; border-bottom: 2px solid #2c5282; padding-bottom: 5px; }",
            "pre { background: #f5f5f5; padding: 15px; overflow-x: auto; }",
            ".disclaimer { font-size: 0.9em; color: #666; margin-top: 30px; }",
            "</style>",
            "</head>",
            "<body>",
            f"<h1>{escape(self.document_title)}</h1>",
        ]
        for section in self._sections:
            if section.title != "Header":
                lines.append(f"<h2>{escape(section.title)}</h2>")
            lines.append(f"<pre>{escape(section.content)}</pre>")

        lines.append('<div class="disclaimer">')
        lines.append(f"<p><strong>DISCLAIMER:</strong> {escape(self._disclaimer())}</p>")
        lines.append(f"<p><em>{escape(self.footer)}</em></p>")
        lines.append("</div>")
        lines.append("</body>")
        lines.append("</html>")
        return "\n".join(lines)

    def _dispatch(self, fmt: ReportFormat, pdf_builder) -> Union[str, bytes]:
        if fmt == ReportFormat.MARKDOWN:
            return self._format_markdown()
        if fmt == ReportFormat.HTML:
            return self._format_html()
        if fmt == ReportFormat.PDF:
            try:
                return pdf_builder()
            except ReportError:
                raise
            except Exception as e:
                raise ReportError(f"PDF rendering failed: {e}", format=fmt.value) from e
        return self._format_text()


class ProposalReportGenerator(_SectionedReportGenerator):
    """
    Render a proposal's strategy projection.

    Sections:
    - Client and financial professional
    - Strategy overview (strategy, product, carrier)
    - Financial configuration
    - Benefits and income projections
    - Projection totals and calculation method
    - Optional calculation audit trail
    """

    document_title = "Financial Strategy Projections"

    def __init__(
        self,
        settings: Optional[ReportSettings] = None,
        projection_settings: Optional[ProjectionSettings] = None,
    ):
        super().__init__(settings)
        self._calculator = ProposalProjectionCalculator(projection_settings)

    def _disclaimer(self) -> str:
        return PROPOSAL_DISCLAIMER

    def generate(
        self,
        proposal: Union[Proposal, dict],
        client: Union[ClientProfile, dict, None] = None,
        advisor: Union[AdvisorProfile, dict, None] = None,
        format: Union[str, ReportFormat, None] = None,
        today: Optional[date] = None,
        projection: Optional[ProjectionResult] = None,
    ) -> Union[str, bytes]:
        """
        Render a proposal.

        Args:
            proposal: Proposal model or stored proposal record
            client: Client the proposal was prepared for
            advisor: Financial professional presenting it
            format: Output format ("text", "markdown", "html", "pdf")
            today: Date printed on the document (default: today)
            projection: Precomputed projection (default: computed from the proposal)

        Returns:
            Formatted report string, or bytes for PDF format
        """
        fmt = _resolve_format(format, self.settings.default_format)
        if not isinstance(proposal, Proposal):
            proposal = Proposal.model_validate(proposal)
        if not isinstance(client, ClientProfile):
            client = ClientProfile.model_validate(client or {})
        if not isinstance(advisor, AdvisorProfile):
            advisor = AdvisorProfile.model_validate(advisor or {})
        today = today or date.today()
        if projection is None:
            projection = self._calculator.calculate(proposal.projection)

        self._sections = []
        self._add_header(proposal, today)
        self._add_parties(client, advisor)
        self._add_strategy(proposal)
        self._add_configuration(proposal, projection)
        self._add_benefits(proposal)
        self._add_projections(proposal, projection)
        if proposal.description:
            self._add_details(proposal)
        if self.settings.include_audit_trail:
            self._add_audit_trail(projection)

        output = self._dispatch(
            fmt, lambda: self._format_pdf(proposal, client, advisor, projection, today)
        )
        logger.info(
            "report_generated",
            report="proposal",
            format=fmt.value,
            document_id=proposal.document_id,
        )
        return output

    def _add_header(self, proposal: Proposal, today: date) -> None:
        content = f"""
FINANCIAL STRATEGY PROJECTIONS
==============================

{proposal.title or 'Untitled Proposal'}
Projections Date: {today.strftime('%B %d, %Y')}
Document ID: #{proposal.document_id}
Status: {proposal.status.replace('_', ' ').title()}
""".strip()
        self._sections.append(ReportSection(title="Header", content=content))

    def _add_parties(self, client: ClientProfile, advisor: AdvisorProfile) -> None:
        birth = client.date_of_birth.strftime("%B %d, %Y") if client.date_of_birth else "N/A"
        content = f"""
CLIENT INFORMATION:
  Name:          {client.name or 'N/A'}
  Email:         {client.email or 'N/A'}
  Phone:         {client.phone or 'N/A'}
  Date of Birth: {birth}

FINANCIAL PROFESSIONAL:
  Name:          {advisor.name}
  Email:         {advisor.email or 'N/A'}
  Company:       {self.settings.firm_name}
""".strip()
        self._sections.append(ReportSection(title="Client Information", content=content))

    def _add_strategy(self, proposal: Proposal) -> None:
        lines = [
            f"Selected Strategy: {display_name('strategy', proposal.strategy) or 'N/A'}",
            f"Product Type:      {display_name('product', proposal.product_type) or 'N/A'}",
            f"Insurance Carrier: {display_name('carrier', proposal.carrier) or 'N/A'}",
        ]
        self._sections.append(ReportSection(title="Strategy Overview", content="\n".join(lines)))

    def _add_configuration(self, proposal: Proposal, projection: ProjectionResult) -> None:
        inputs = proposal.projection
        content = f"""
Initial Deposit:       {format_currency(inputs.initial_lump_sum):>14}
Monthly Contribution:  {format_currency(inputs.monthly_contribution):>14}
Annual COI / Fee:      {format_currency(inputs.annual_coi):>14}
First Year Bonus:      {format_currency(inputs.first_year_bonus):>14}
Payment Period:        {f'{projection.years_to_pay} Years':>14}
Expected Return:       {format_percentage(projection.average_return_percentage):>14}
""".strip()
        self._sections.append(ReportSection(title="Financial Configuration", content=content))

    def _add_benefits(self, proposal: Proposal) -> None:
        content = f"""
INSURANCE BENEFITS:
  Death Benefit:       {format_currency(proposal.death_benefit_amount):>14}
  Living Benefits:     {format_currency(proposal.living_benefits):>14}
  Terminal Illness:    {format_currency(proposal.terminal_illness_benefit):>14}
  Chronic Illness:     {format_currency(proposal.chronic_illness_benefit):>14}
  Critical Illness:    {format_currency(proposal.critical_illness_benefit):>14}

INCOME PROJECTIONS:
  10-Year Income:      {format_currency(proposal.ten_year_income):>14}
  Lifetime Income:     {format_currency(proposal.lifetime_income):>14}
  Monthly Cost:        {format_currency(proposal.average_monthly_cost):>14}
""".strip()
        self._sections.append(ReportSection(title="Benefits & Coverage", content=content))

    def _calculation_method(self, proposal: Proposal, projection: ProjectionResult) -> str:
        inputs = proposal.projection
        return (
            "Projected growth is calculated using compound interest at "
            f"{format_percentage(projection.average_return_percentage)} annual return, with annual "
            f"COI/Fees of {format_currency(inputs.annual_coi)} deducted each year. Monthly "
            f"contributions of {format_currency(inputs.monthly_contribution)} are added throughout "
            f"the {projection.years_to_pay}-year period."
        )

    def _add_projections(self, proposal: Proposal, projection: ProjectionResult) -> None:
        lines = [
            f"Total Contributions:   {format_currency(projection.total_contributions):>14}",
            f"Total COI / Fees:      {format_currency(projection.total_coi):>14}",
            f"Projected Growth:      {format_currency(projection.growth):>14}",
            f"Total Accumulation:    {format_currency(projection.final_value):>14}",
            "",
            f"Calculation Method: {self._calculation_method(proposal, projection)}",
        ]
        if projection.schedule:
            lines.extend([
                "",
                f"{'Year':<6} {'Contributions':>14} {'Growth':>14} {'COI':>12} {'End Value':>14}",
                "-" * 64,
            ])
            for year in projection.schedule:
                lines.append(
                    f"{year.year:<6} "
                    f"{format_currency(year.contributions):>14} "
                    f"{format_currency(year.growth):>14} "
                    f"{format_currency(year.coi):>12} "
                    f"{format_currency(year.end_value):>14}"
                )
        self._sections.append(ReportSection(title="Financial Projections", content="\n".join(lines)))

    def _add_details(self, proposal: Proposal) -> None:
        self._sections.append(ReportSection(title="Projections Details", content=proposal.description))

    def _add_audit_trail(self, projection: ProjectionResult) -> None:
        lines = [
            f"{'Step':<30} {'Input':<25} {'Output':<15}",
            "-" * 72,
        ]
        for entry in projection.audit_log[:20]:
            input_val = entry.input_value[:23] + ".." if len(entry.input_value) > 25 else entry.input_value
            output_val = entry.output_value[:13] + ".." if len(entry.output_value) > 15 else entry.output_value
            lines.append(f"{entry.step:<30} {input_val:<25} {output_val:<15}")
        if len(projection.audit_log) > 20:
            lines.append(f"... and {len(projection.audit_log) - 20} more entries")
        lines.append("")
        lines.append(f"Total audit entries: {len(projection.audit_log)}")
        self._sections.append(ReportSection(title="Audit Trail", content="\n".join(lines)))

    def _format_pdf(
        self,
        proposal: Proposal,
        client: ClientProfile,
        advisor: AdvisorProfile,
        projection: ProjectionResult,
        today: date,
    ) -> bytes:
        styles = _pdf_styles()
        inputs = proposal.projection
        elements = [
            Paragraph("FINANCIAL STRATEGY PROJECTIONS", styles["ReportTitle"]),
            _key_value_table([
                ["Proposal:", proposal.title or "Untitled Proposal"],
                ["Projections Date:", today.strftime("%B %d, %Y")],
                ["Document ID:", f"#{proposal.document_id}"],
            ], label_width=1.8),
            Spacer(1, 0.2 * inch),
        ]

        elements.append(Paragraph("Client Information", styles["SectionHeading"]))
        elements.append(_key_value_table([
            ["Client:", client.name or "N/A"],
            ["Email:", client.email or "N/A"],
            ["Phone:", client.phone or "N/A"],
            ["Financial Professional:", advisor.name],
            ["Company:", self.settings.firm_name],
        ]))

        elements.append(Paragraph("Strategy Overview", styles["SectionHeading"]))
        elements.append(_key_value_table([
            ["Selected Strategy:", display_name("strategy", proposal.strategy) or "N/A"],
            ["Product Type:", display_name("product", proposal.product_type) or "N/A"],
            ["Insurance Carrier:", display_name("carrier", proposal.carrier) or "N/A"],
        ]))

        elements.append(Paragraph("Financial Configuration", styles["SectionHeading"]))
        elements.append(_key_value_table([
            ["Initial Deposit:", format_currency(inputs.initial_lump_sum)],
            ["Monthly Contribution:", format_currency(inputs.monthly_contribution)],
            ["Annual COI / Fee:", format_currency(inputs.annual_coi)],
            ["First Year Bonus:", format_currency(inputs.first_year_bonus)],
            ["Payment Period:", f"{projection.years_to_pay} Years"],
            ["Expected Return:", format_percentage(projection.average_return_percentage)],
        ]))

        elements.append(Paragraph("Benefits & Coverage", styles["SectionHeading"]))
        elements.append(_grid_table(
            ["Benefit", "Amount"],
            [
                ["Death Benefit", format_currency(proposal.death_benefit_amount)],
                ["Living Benefits", format_currency(proposal.living_benefits)],
                ["Terminal Illness", format_currency(proposal.terminal_illness_benefit)],
                ["Chronic Illness", format_currency(proposal.chronic_illness_benefit)],
                ["Critical Illness", format_currency(proposal.critical_illness_benefit)],
                ["10-Year Income", format_currency(proposal.ten_year_income)],
                ["Lifetime Income", format_currency(proposal.lifetime_income)],
                ["Monthly Cost", format_currency(proposal.average_monthly_cost)],
            ],
            [3.0, 1.5],
        ))

        elements.append(Paragraph("Financial Projections", styles["SectionHeading"]))
        elements.append(_key_value_table([
            ["Total Contributions:", format_currency(projection.total_contributions)],
            ["Projected Growth:", format_currency(projection.growth)],
            ["Total Accumulation:", format_currency(projection.final_value)],
        ]))
        elements.append(Spacer(1, 0.1 * inch))
        elements.append(Paragraph(
            f"<b>Calculation Method:</b> {escape(self._calculation_method(proposal, projection))}",
            styles["Normal"],
        ))
        if projection.schedule:
            elements.append(Spacer(1, 0.2 * inch))
            elements.append(_grid_table(
                ["Year", "Contributions", "Growth", "COI", "End Value"],
                [
                    [
                        str(year.year),
                        format_currency(year.contributions),
                        format_currency(year.growth),
                        format_currency(year.coi),
                        format_currency(year.end_value),
                    ]
                    for year in projection.schedule
                ],
                [0.6, 1.4, 1.4, 1.2, 1.4],
            ))

        if proposal.description:
            elements.append(Paragraph("Projections Details", styles["SectionHeading"]))
            elements.append(Paragraph(escape(proposal.description), styles["Normal"]))

        elements.append(Spacer(1, 0.5 * inch))
        elements.append(Paragraph(f"DISCLAIMER: {PROPOSAL_DISCLAIMER}", styles["Disclaimer"]))
        elements.append(Spacer(1, 0.1 * inch))
        elements.append(Paragraph(escape(self.footer), styles["Disclaimer"]))
        return _render_pdf(elements)


class FinancialReportGenerator(_SectionedReportGenerator):
    """
    Render a client's financial report.

    Sections:
    - Executive summary (net worth, cash flow, FIN)
    - Cash flow and balance sheet line items
    - Insurance needs and in-force policies
    - Goals and estate planning progress
    - Recommendations and legacy wishes
    """

    document_title = "Personal Financial Report"

    def _disclaimer(self) -> str:
        return REPORT_DISCLAIMER.format(firm=self.settings.firm_name)

    def generate(
        self,
        report: FinancialReport,
        format: Union[str, ReportFormat, None] = None,
    ) -> Union[str, bytes]:
        """
        Render a financial report.

        Args:
            report: Report assembled by FinancialReportBuilder
            format: Output format ("text", "markdown", "html", "pdf")

        Returns:
            Formatted report string, or bytes for PDF format
        """
        fmt = _resolve_format(format, self.settings.default_format)

        self._sections = []
        self._add_header(report)
        self._add_summary(report)
        self._add_cashflow(report)
        self._add_balance_sheet(report)
        self._add_insurance(report)
        self._add_goals(report)
        self._add_estate(report)
        self._add_recommendations(report)
        if report.legacy_wishes:
            self._sections.append(ReportSection(title="Legacy Wishes", content=report.legacy_wishes))

        output = self._dispatch(fmt, lambda: self._format_pdf(report))
        logger.info(
            "report_generated",
            report="financial",
            format=fmt.value,
            document_id=report.document_id,
            recommendations=len(report.recommendations),
        )
        return output

    def _add_header(self, report: FinancialReport) -> None:
        client = report.client
        age = f"{report.client_age}" if report.client_age is not None else "N/A"
        lines = [
            "PERSONAL FINANCIAL REPORT",
            "=========================",
            "",
            f"Prepared for: {client.name or 'N/A'}",
            f"Age: {age}",
        ]
        if client.spouse_name:
            lines.append(f"Spouse: {client.spouse_name}")
        if client.children:
            lines.append(f"Children: {client.children}")
        lines.extend([
            f"Advisor: {report.advisor.name}",
            f"Report Date: {report.report_date.strftime('%B %d, %Y')}",
            f"Document ID: {report.document_id}",
        ])
        self._sections.append(ReportSection(title="Header", content="\n".join(lines)))

    def _add_summary(self, report: FinancialReport) -> None:
        cashflow = report.cashflow
        balance = report.balance_sheet
        content = f"""
Net Worth:                        {format_currency(balance.net_worth):>14}
Monthly Net Cash Flow:            {format_currency(cashflow.net_income):>14}
Savings Rate:                     {format_percentage(cashflow.savings_rate, 1):>14}
Financial Independence Number:    {format_currency(report.financial_independence_number):>14}
""".strip()
        self._sections.append(ReportSection(title="Executive Summary", content=content))

    @staticmethod
    def _item_lines(title: str, items: list[LineItem], total_label: str, total) -> list[str]:
        lines = [f"{title}:"]
        if not items:
            lines.append("  None recorded")
        for item in items:
            label = item.description or item.category.replace("_", " ").title() or "Unlabelled"
            lines.append(f"  {label[:34]:<34} {format_currency(item.amount):>14}")
        lines.append(f"  {total_label:<34} {format_currency(total):>14}")
        return lines

    def _add_cashflow(self, report: FinancialReport) -> None:
        cashflow = report.cashflow
        lines = self._item_lines("INCOME", report.income_sources, "TOTAL INCOME", cashflow.total_income)
        lines.append("")
        lines.extend(self._item_lines("EXPENSES", report.expenses, "TOTAL EXPENSES", cashflow.total_expenses))
        lines.append("")
        lines.append(f"  {'NET CASH FLOW':<34} {format_currency(cashflow.net_income):>14}")
        self._sections.append(ReportSection(title="Cash Flow", content="\n".join(lines)))

    def _add_balance_sheet(self, report: FinancialReport) -> None:
        balance = report.balance_sheet
        lines = self._item_lines("ASSETS", report.assets, "TOTAL ASSETS", balance.total_assets)
        lines.append("")
        lines.extend(
            self._item_lines("LIABILITIES", report.liabilities, "TOTAL LIABILITIES", balance.total_liabilities)
        )
        lines.append("")
        lines.append(f"  {'NET WORTH':<34} {format_currency(balance.net_worth):>14}")
        lines.append(f"  {'Debt-to-Asset Ratio':<34} {format_percentage(balance.debt_to_asset_ratio, 1):>14}")
        self._sections.append(ReportSection(title="Balance Sheet", content="\n".join(lines)))

    def _add_insurance(self, report: FinancialReport) -> None:
        insurance = report.insurance
        needs = insurance.needs
        lines = [
            f"Total Needs:                  {format_currency(needs.total_needs):>14}",
            f"Total Resources:              {format_currency(needs.total_resources):>14}",
            f"Additional Coverage Needed:   {format_currency(needs.additional_coverage_needed):>14}",
            f"Current Coverage:             {format_currency(insurance.total_coverage):>14}",
            f"Annual Premiums:              {format_currency(insurance.total_premiums):>14}",
        ]
        if insurance.coverage_gap > 0:
            lines.append(f"COVERAGE GAP:                 {format_currency(insurance.coverage_gap):>14}")
        else:
            lines.append("Coverage meets the calculated need.")
        if insurance.policies:
            lines.append("")
            lines.append("POLICIES IN FORCE:")
            for policy in insurance.policies:
                kind = policy.policy_type.replace("_", " ").title() or "Policy"
                lines.append(
                    f"  {policy.carrier or 'Unknown carrier'} ({kind}): "
                    f"{format_currency(policy.coverage_amount)} coverage, "
                    f"{format_currency(policy.annual_premium)}/year"
                )
        self._sections.append(ReportSection(title="Insurance Analysis", content="\n".join(lines)))

    def _add_goals(self, report: FinancialReport) -> None:
        goals = report.goals
        if not goals.goals:
            content = "No financial goals recorded."
        else:
            lines = [
                f"{'Goal':<24} {'Target':>12} {'Saved':>12} {'Progress':>9} {'Monthly':>10} {'Status':>10}",
                "-" * 82,
            ]
            for result in goals.goals:
                goal = result.goal
                lines.append(
                    f"{(goal.title or 'Untitled')[:24]:<24} "
                    f"{format_currency(goal.target_amount):>12} "
                    f"{format_currency(goal.current_amount):>12} "
                    f"{format_percentage(result.progress, 0):>9} "
                    f"{format_currency(result.monthly_required):>10} "
                    f"{result.status.value.replace('_', ' '):>10}"
                )
            lines.append("-" * 82)
            lines.append(
                f"{'TOTAL':<24} {format_currency(goals.total_target):>12} "
                f"{format_currency(goals.total_saved):>12} {format_percentage(goals.overall_progress, 0):>9}"
            )
            content = "\n".join(lines)
        self._sections.append(ReportSection(title="Financial Goals", content=content))

    def _add_estate(self, report: FinancialReport) -> None:
        estate = report.estate
        lines = [f"Completed: {estate.completed} of {estate.total} ({format_percentage(estate.percentage, 0)})"]
        if estate.outstanding:
            lines.append("")
            lines.append("OUTSTANDING:")
            for item in estate.outstanding:
                suffix = f" ({item.notes})" if item.notes else ""
                lines.append(f"  [ ] {item.label}{suffix}")
        self._sections.append(ReportSection(title="Estate Planning", content="\n".join(lines)))

    def _add_recommendations(self, report: FinancialReport) -> None:
        lines = []
        for rec in report.recommendations:
            lines.append(f"* {rec.title}")
            lines.append(f"  {rec.message}")
        self._sections.append(
            ReportSection(title="Recommendations", content="\n".join(lines) or "No recommendations.")
        )

    def _format_pdf(self, report: FinancialReport) -> bytes:
        styles = _pdf_styles()
        cashflow = report.cashflow
        balance = report.balance_sheet
        insurance = report.insurance

        elements = [
            Paragraph("PERSONAL FINANCIAL REPORT", styles["ReportTitle"]),
            _key_value_table([
                ["Prepared For:", report.client.name or "N/A"],
                ["Advisor:", report.advisor.name],
                ["Report Date:", report.report_date.strftime("%B %d, %Y")],
                ["Document ID:", report.document_id],
            ], label_width=1.8),
            Spacer(1, 0.2 * inch),
        ]

        elements.append(Paragraph("Executive Summary", styles["SectionHeading"]))
        elements.append(_key_value_table([
            ["Net Worth:", format_currency(balance.net_worth)],
            ["Monthly Net Cash Flow:", format_currency(cashflow.net_income)],
            ["Savings Rate:", format_percentage(cashflow.savings_rate, 1)],
            ["Financial Independence Number:", format_currency(report.financial_independence_number)],
        ], label_width=3.0))

        elements.append(Paragraph("Cash Flow", styles["SectionHeading"]))
        rows = [["Income", i.description or i.category, format_currency(i.amount)] for i in report.income_sources]
        rows += [["Expense", e.description or e.category, format_currency(e.amount)] for e in report.expenses]
        rows.append(["", "Net Cash Flow", format_currency(cashflow.net_income)])
        elements.append(_grid_table(["Type", "Item", "Amount"], rows, [1.0, 3.5, 1.5]))

        elements.append(Paragraph("Balance Sheet", styles["SectionHeading"]))
        rows = [["Asset", a.description or a.category, format_currency(a.amount)] for a in report.assets]
        rows += [["Liability", item.description or item.category, format_currency(item.amount)] for item in report.liabilities]
        rows.append(["", "Net Worth", format_currency(balance.net_worth)])
        elements.append(_grid_table(["Type", "Item", "Amount"], rows, [1.0, 3.5, 1.5]))

        elements.append(Paragraph("Insurance Analysis", styles["SectionHeading"]))
        elements.append(_key_value_table([
            ["Total Needs:", format_currency(insurance.needs.total_needs)],
            ["Total Resources:", format_currency(insurance.needs.total_resources)],
            ["Additional Coverage Needed:", format_currency(insurance.needs.additional_coverage_needed)],
            ["Current Coverage:", format_currency(insurance.total_coverage)],
            ["Coverage Gap:", format_currency(max(insurance.coverage_gap, 0))],
        ], label_width=3.0))

        if report.goals.goals:
            elements.append(Paragraph("Financial Goals", styles["SectionHeading"]))
            elements.append(_grid_table(
                ["Goal", "Target", "Saved", "Progress", "Monthly"],
                [
                    [
                        (r.goal.title or "Untitled")[:30],
                        format_currency(r.goal.target_amount),
                        format_currency(r.goal.current_amount),
                        format_percentage(r.progress, 0),
                        format_currency(r.monthly_required),
                    ]
                    for r in report.goals.goals
                ],
                [2.2, 1.1, 1.1, 0.8, 1.0],
            ))

        elements.append(Paragraph("Estate Planning", styles["SectionHeading"]))
        elements.append(Paragraph(
            f"{report.estate.completed} of {report.estate.total} items completed "
            f"({format_percentage(report.estate.percentage, 0)})",
            styles["Normal"],
        ))
        for item in report.estate.outstanding:
            elements.append(Paragraph(f"• {escape(item.label)}", styles["Normal"]))

        elements.append(Paragraph("Recommendations", styles["SectionHeading"]))
        for rec in report.recommendations:
            elements.append(Paragraph(f"<b>{escape(rec.title)}</b>", styles["Normal"]))
            elements.append(Paragraph(escape(rec.message), styles["Normal"]))
            elements.append(Spacer(1, 0.1 * inch))

        if report.legacy_wishes:
            elements.append(Paragraph("Legacy Wishes", styles["SectionHeading"]))
            elements.append(Paragraph(escape(report.legacy_wishes), styles["Normal"]))

        elements.append(Spacer(1, 0.5 * inch))
        elements.append(Paragraph(escape(f"DISCLAIMER: {self._disclaimer()}"), styles["Disclaimer"]))
        elements.append(Spacer(1, 0.1 * inch))
        elements.append(Paragraph(escape(self.footer), styles["Disclaimer"]))
        return _render_pdf(elements)


__all__ = [
    "PROPOSAL_DISCLAIMER",
    "REPORT_DISCLAIMER",
    "ReportSection",
    "ProposalReportGenerator",
    "FinancialReportGenerator",
]
