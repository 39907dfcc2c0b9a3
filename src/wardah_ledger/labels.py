"""Bilingual (Arabic/English) captions for the trial balance report."""

from wardah_ledger.models import Language

TITLE: dict[Language, str] = {
    "ar": "ميزان المراجعة",
    "en": "Trial Balance",
}

TOTALS: dict[Language, str] = {
    "ar": "الإجماليات",
    "en": "TOTALS",
}

FROM: dict[Language, str] = {"ar": "من تاريخ", "en": "From"}
TO: dict[Language, str] = {"ar": "إلى", "en": "To"}

# Workbook columns: code, name, type, then the six amount columns
SHEET_HEADERS: dict[Language, list[str]] = {
    "ar": [
        "كود الحساب",
        "اسم الحساب",
        "نوع الحساب",
        "رصيد افتتاحي - مدين",
        "رصيد افتتاحي - دائن",
        "حركة الفترة - مدين",
        "حركة الفترة - دائن",
        "رصيد ختامي - مدين",
        "رصيد ختامي - دائن",
    ],
    "en": [
        "Account Code",
        "Account Name",
        "Account Type",
        "Opening Balance - Debit",
        "Opening Balance - Credit",
        "Period Movement - Debit",
        "Period Movement - Credit",
        "Closing Balance - Debit",
        "Closing Balance - Credit",
    ],
}

# PDF columns are narrower: no account type, abbreviated amounts
PDF_HEADERS: dict[Language, list[str]] = {
    "ar": [
        "كود الحساب",
        "اسم الحساب",
        "افتتاحي مدين",
        "افتتاحي دائن",
        "فترة مدين",
        "فترة دائن",
        "ختامي مدين",
        "ختامي دائن",
    ],
    "en": [
        "Code",
        "Account Name",
        "Open. Debit",
        "Open. Credit",
        "Per. Debit",
        "Per. Credit",
        "Clos. Debit",
        "Clos. Credit",
    ],
}

LOAD_FAILED: dict[Language, str] = {
    "ar": "فشل في تحميل ميزان المراجعة",
    "en": "Failed to load trial balance",
}

BALANCED: dict[Language, str] = {
    "ar": "✓ ميزان المراجعة متوازن",
    "en": "✓ Trial Balance is Balanced",
}

UNBALANCED: dict[Language, str] = {
    "ar": "⚠️ تحذير: ميزان المراجعة غير متوازن! يرجى مراجعة القيود المحاسبية",
    "en": "⚠️ Warning: Trial Balance is not balanced! Please review journal entries",
}

DIFFERENCE: dict[Language, str] = {
    "ar": "الفرق",
    "en": "Difference",
}


def export_filename(as_of_date: str, extension: str) -> str:
    """``trial-balance-<asOfDate>.<extension>``."""
    return f"trial-balance-{as_of_date}.{extension}"
