"""Export Service - CSV and plain-text renderings of a bill.

Values come straight from the calculation engine and are only rounded as
they are formatted here.
"""

import csv
import io
from decimal import Decimal
from typing import List, Optional

from splitter.models.bill import Bill, BillItem, Person
from splitter.services.calculation_service import CalculationEngine
from splitter.utils.currency import format_percentage

ZERO = Decimal("0")
SEPARATOR = "━" * 19


def _split_amount(item: BillItem, person: Person) -> Optional[Decimal]:
    """Total a person holds on an item, or None when they hold nothing"""
    amounts = [split.amount for split in item.splits if split.person is person]
    if not amounts:
        return None
    return sum(amounts, ZERO)


class ExportService:
    """Renders bills for sharing"""
    
    @staticmethod
    def generate_csv(bill: Bill) -> str:
        """
        Row per item, column per person, followed by the adjustment trailer,
        payment flags and payee details.
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        fmt = bill.format_amount
        people = list(bill.people)
        
        writer.writerow(["Bill Splitter Export"])
        writer.writerow([])
        writer.writerow(["Place:", bill.place_name])
        writer.writerow(["Date:", bill.display_date])
        writer.writerow(["Currency:", bill.currency_code])
        writer.writerow([])
        
        writer.writerow(["Discount:", format_percentage(bill.discount_percentage)])
        writer.writerow(["Service Charge:", format_percentage(bill.service_charge_percentage)])
        writer.writerow(["Tax:", format_percentage(bill.tax_percentage)])
        writer.writerow([])
        
        writer.writerow(["Item", "Amount"] + [person.name for person in people])
        for item in bill.items:
            row = [item.name, fmt(item.total_amount)]
            for person in people:
                amount = _split_amount(item, person)
                row.append(fmt(amount) if amount is not None else "")
            writer.writerow(row)
        writer.writerow([])
        
        totals = CalculationEngine.bill_totals(bill)
        breakdowns = totals.person_breakdowns
        
        writer.writerow(["Subtotal", fmt(totals.subtotal)] + [fmt(b.subtotal) for b in breakdowns])
        if totals.discount_amount > ZERO:
            writer.writerow(
                ["Discount", fmt(-totals.discount_amount)] + [fmt(-b.discount_amount) for b in breakdowns]
            )
        if totals.service_charge > ZERO:
            writer.writerow(
                ["Service Charge", fmt(totals.service_charge)] + [fmt(b.service_charge) for b in breakdowns]
            )
        if totals.tax > ZERO:
            writer.writerow(["Tax", fmt(totals.tax)] + [fmt(b.tax) for b in breakdowns])
        writer.writerow(["TOTAL", fmt(totals.grand_total)] + [fmt(b.final_amount) for b in breakdowns])
        writer.writerow([])
        
        writer.writerow(["Paid?", ""] + ["YES" if person.has_paid else "NO" for person in people])
        writer.writerow([])
        
        writer.writerow(["Pay To:", bill.pay_to_name])
        writer.writerow(["Method:", bill.pay_to_method])
        writer.writerow(["Details:", bill.pay_to_details])
        
        return buffer.getvalue().rstrip("\n")
    
    @staticmethod
    def generate_text_summary(bill: Bill) -> str:
        """Condensed per-person summary for pasting into a chat"""
        fmt = bill.format_amount
        totals = CalculationEngine.bill_totals(bill)
        
        lines: List[str] = [
            "Bill Summary",
            SEPARATOR,
            bill.place_name,
            bill.display_date,
            "",
            "Breakdown:",
        ]
        for breakdown in totals.person_breakdowns:
            status = "[paid]" if breakdown.person.has_paid else "[pending]"
            lines.append(f"  {status} {breakdown.person.name}: {fmt(breakdown.final_amount)}")
        
        lines += ["", SEPARATOR, f"Total: {fmt(totals.grand_total)}"]
        
        if bill.pay_to_name:
            lines += ["", f"Pay to: {bill.pay_to_name}"]
            if bill.pay_to_method:
                lines.append(f"   {bill.pay_to_method}")
            if bill.pay_to_details:
                lines.append(f"   {bill.pay_to_details}")
        
        return "\n".join(lines)
    
    @staticmethod
    def export_filename(bill: Bill, extension: str = "csv") -> str:
        name = bill.place_name or "Bill"
        safe = "".join(ch for ch in name if ch not in '<>:"/\\|?*').strip() or "Bill"
        return f"{safe} - {bill.short_display_date}.{extension}"
