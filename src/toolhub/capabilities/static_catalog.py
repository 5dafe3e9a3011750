"""Embedded fallback catalog.

Used when no provider can be set up, so callers always see a useful tool
list even with zero live integrations. Entries carry stub handlers.
"""

from __future__ import annotations

from typing import Any


def _p(name: str, type: str, description: str, required: bool = True) -> dict[str, Any]:
    return {"name": name, "type": type, "description": description, "required": required}


STATIC_CATALOG: tuple[dict[str, Any], ...] = (
    # Compliance
    {"name": "gst_verify", "category": "compliance", "description": "Verify GSTIN number and get business details",
     "parameters": [_p("gstin", "string", "GSTIN (15 chars)")]},
    {"name": "gst_calc", "category": "compliance", "description": "Calculate GST on amount",
     "parameters": [_p("amount", "number", "Base amount"), _p("rate", "number", "GST rate (5/12/18/28)", False)]},
    {"name": "pan_verify", "category": "compliance", "description": "Verify PAN number and get holder details",
     "parameters": [_p("pan", "string", "PAN number")]},
    {"name": "tds_calc", "category": "compliance", "description": "Calculate TDS on payment",
     "parameters": [_p("amount", "number", "Payment amount"), _p("section", "string", "TDS section (194C etc)")]},
    {"name": "einvoice_generate", "category": "compliance", "description": "Generate e-Invoice (IRN)",
     "parameters": [_p("invoice_data", "object", "Invoice details")]},
    {"name": "eway_generate", "category": "compliance", "description": "Generate e-Way bill",
     "parameters": [_p("shipment_data", "object", "Shipment details")]},
    {"name": "gstr3b_prepare", "category": "compliance", "description": "Prepare GSTR-3B return",
     "parameters": [_p("period", "string", "Return period (MM-YYYY)")]},
    {"name": "income_tax", "category": "compliance", "description": "Calculate income tax liability",
     "parameters": [_p("income", "number", "Annual income"), _p("regime", "string", "old or new", False)]},
    # ERP
    {"name": "invoice_create", "category": "erp", "description": "Create invoice in ERP",
     "parameters": [_p("customer_id", "string", "Customer ID"), _p("items", "array", "Line items")]},
    {"name": "inventory_check", "category": "erp", "description": "Check inventory levels",
     "parameters": [_p("sku", "string", "Product SKU")]},
    {"name": "purchase_order", "category": "erp", "description": "Create purchase order",
     "parameters": [_p("vendor_id", "string", "Vendor ID"), _p("items", "array", "Items to order")]},
    {"name": "balance_sheet", "category": "erp", "description": "Get balance sheet summary",
     "parameters": [_p("period", "string", "Financial period")]},
    {"name": "profit_loss", "category": "erp", "description": "Get P&L statement",
     "parameters": [_p("period", "string", "Financial period")]},
    # CRM
    {"name": "lead_create", "category": "crm", "description": "Create new lead in CRM",
     "parameters": [_p("name", "string", "Lead name"), _p("email", "string", "Lead email", False)]},
    {"name": "lead_search", "category": "crm", "description": "Search leads by criteria",
     "parameters": [_p("query", "string", "Search query")]},
    {"name": "contact_create", "category": "crm", "description": "Create contact in CRM",
     "parameters": [_p("name", "string", "Contact name")]},
    {"name": "opportunity_create", "category": "crm", "description": "Create sales opportunity",
     "parameters": [_p("name", "string", "Deal name"), _p("value", "number", "Deal value", False)]},
    # Banking
    {"name": "emi_calc", "category": "banking", "description": "Calculate EMI for loan",
     "parameters": [_p("principal", "number", "Loan amount"), _p("rate", "number", "Annual interest rate %"),
                    _p("tenure", "number", "Months")]},
    {"name": "sip_calc", "category": "banking", "description": "Calculate SIP returns",
     "parameters": [_p("monthly", "number", "Monthly investment"), _p("rate", "number", "Expected return % p.a."),
                    _p("years", "number", "Investment period years")]},
    {"name": "fastag", "category": "banking", "description": "Check FASTag balance",
     "parameters": [_p("vehicle_number", "string", "Vehicle registration number")]},
    # Government
    {"name": "vahan", "category": "government", "description": "Verify vehicle registration (VAHAN)",
     "parameters": [_p("vehicle_number", "string", "Vehicle registration number")]},
    {"name": "sarathi", "category": "government", "description": "Verify driving licence (SARATHI)",
     "parameters": [_p("licence_number", "string", "Driving licence number")]},
    {"name": "epf_balance", "category": "government", "description": "Check EPF/PF balance",
     "parameters": [_p("uan", "string", "UAN number")]},
    {"name": "pm_kisan", "category": "government", "description": "Check PM-KISAN beneficiary status",
     "parameters": [_p("aadhaar", "string", "Aadhaar number (masked)")]},
    # Logistics
    {"name": "container_track", "category": "logistics", "description": "Track container by number",
     "parameters": [_p("container_number", "string", "Container ID")]},
    {"name": "vessel_search", "category": "logistics", "description": "Search vessels by name or IMO",
     "parameters": [_p("query", "string", "Vessel name or IMO")]},
    {"name": "port_search", "category": "logistics", "description": "Search Indian ports",
     "parameters": [_p("query", "string", "Port name or code")]},
    {"name": "freight_loads", "category": "logistics", "description": "List available freight loads",
     "parameters": [_p("origin", "string", "Origin city"), _p("destination", "string", "Destination city", False)]},
    # Fleet
    {"name": "fleet_vehicles", "category": "fleet", "description": "List fleet vehicles",
     "parameters": [_p("status", "string", "active/idle/maintenance", False)]},
    {"name": "vehicle_position", "category": "fleet", "description": "Get real-time vehicle position",
     "parameters": [_p("vehicle_id", "string", "Vehicle ID")]},
    {"name": "distance_calc", "category": "fleet", "description": "Calculate distance between cities",
     "parameters": [_p("from", "string", "Origin"), _p("to", "string", "Destination")]},
    {"name": "toll_estimate", "category": "fleet", "description": "Estimate toll cost for route",
     "parameters": [_p("from", "string", "Origin"), _p("to", "string", "Destination"),
                    _p("vehicle_type", "string", "truck/car/bus", False)]},
    # Messaging
    {"name": "send_telegram", "category": "messaging", "description": "Send Telegram message",
     "parameters": [_p("chat_id", "string", "Telegram chat ID"), _p("message", "string", "Message text")]},
    {"name": "send_whatsapp", "category": "messaging", "description": "Send WhatsApp message via API",
     "parameters": [_p("phone", "string", "Phone with country code"), _p("message", "string", "Message text")]},
    # Utilities
    {"name": "calculator", "category": "utilities", "description": "Evaluate mathematical expression",
     "parameters": [_p("expression", "string", "Math expression e.g. 2+2*10")]},
    {"name": "weather", "category": "utilities", "description": "Get current weather for city",
     "parameters": [_p("city", "string", "City name")]},
    {"name": "web_search", "category": "utilities", "description": "Search the web",
     "parameters": [_p("query", "string", "Search query")]},
    {"name": "pincode_info", "category": "utilities", "description": "Get info for Indian PIN code",
     "parameters": [_p("pincode", "string", "6-digit PIN code")]},
)


def stub_handler(tool: str):
    """Return a handler answering with a documented stub payload."""

    def handler(params: dict[str, Any]) -> dict[str, Any]:
        return {
            "success": True,
            "data": {
                "stub": True,
                "tool": tool,
                "params": params,
                "note": "No live executor loaded for this tool - stub response",
            },
        }

    return handler


__all__ = ["STATIC_CATALOG", "stub_handler"]
