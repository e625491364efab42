"""
Utilities for Reports module

Provides CSV export functionality and value formatting for report
downloads.
"""

import csv
import io
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List

from fastapi import Response


def create_csv_response(
    data: List[Dict[str, Any]],
    filename: str,
    headers: Dict[str, str] = None
) -> Response:
    """
    Create a CSV response from a list of dictionaries.

    Args:
        data: List of dictionaries with report data
        filename: Name for the CSV file
        headers: Optional mapping of field names to CSV headers

    Returns:
        FastAPI Response with CSV content
    """
    if not data:
        # Header row only
        csv_content = ""
        if headers:
            csv_content = ",".join(headers.values()) + "\n"
    else:
        output = io.StringIO()

        fieldnames = list(headers.keys()) if headers else list(data[0].keys())
        csv_headers = list(headers.values()) if headers else fieldnames

        writer = csv.DictWriter(output, fieldnames=fieldnames, lineterminator="\n")
        writer.writerow(dict(zip(fieldnames, csv_headers)))

        for row in data:
            writer.writerow({
                key: format_csv_value(value)
                for key, value in row.items()
                if key in fieldnames
            })

        csv_content = output.getvalue()
        output.close()

    return Response(
        content=csv_content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={filename}",
            "Content-Type": "text/csv; charset=utf-8"
        }
    )


def format_csv_value(value: Any) -> str:
    """
    Format a value for CSV export.

    Args:
        value: Value to format

    Returns:
        String representation suitable for CSV
    """
    if value is None:
        return ""
    elif isinstance(value, Enum):
        return str(value.value)
    elif isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, (date, datetime)):
        return value.isoformat()
    elif isinstance(value, bool):
        return "Yes" if value else "No"
    else:
        return str(value)


def prepare_seller_balances_csv(report_data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Per-seller rows of the financial report for CSV export"""
    return [
        {
            "name": seller["name"],
            "location": seller.get("location") or "",
            "initial_balance": seller["initial_balance"],
            "total_payments": seller["total_payments"],
            "balance_remaining": seller["balance_remaining"],
            "pending_amount": seller["pending_amount"],
        }
        for seller in report_data["by_seller"]
    ]


CSV_HEADERS = {
    "seller_balances": {
        "name": "Seller",
        "location": "Location",
        "initial_balance": "Initial Balance",
        "total_payments": "Total Payments",
        "balance_remaining": "Balance Remaining",
        "pending_amount": "Pending Amount"
    }
}
