"""
client/i18n.py
--------------
Minimal translation lookup: ``t("dashboard.title", "el")``.
Missing keys fall back to English, then to the key itself.
"""

TRANSLATIONS = {
    "en": {
        "dashboard": {
            "title": "Smart Dashboard",
            "tasks": "Tasks",
            "completed": "Completed",
            "active": "Active",
            "completionRate": "Completion rate",
            "totalExpenses": "Total expenses",
            "budget": "Budget status",
            "remaining": "remaining",
            "loadError": "Failed to load data. Make sure the server is running.",
            "retry": "Retry",
        },
        "tasks": {
            "title": "Tasks",
            "empty": "No tasks found.",
            "page": "Page {page} of {pages}",
        },
        "expenses": {
            "title": "Monthly Overview",
            "income": "Income",
            "expenses": "Expenses",
            "savings": "Savings",
            "transactions": "Transactions",
            "empty": "No transactions found.",
        },
        "insights": {
            "title": "AI Insights",
            "summary": "Summary",
            "recommendations": "Recommendations",
            "spending": "Spending insight",
        },
        "settings": {
            "title": "Settings",
            "darkMode": "Dark Mode",
            "fontSize": "Font Size",
            "language": "Language",
            "small": "Small",
            "medium": "Medium",
            "large": "Large",
            "english": "English",
            "greek": "Greek",
        },
    },
    "el": {
        "dashboard": {
            "title": "Έξυπνος Πίνακας",
            "tasks": "Εργασίες",
            "completed": "Ολοκληρωμένες",
            "active": "Ενεργές",
            "completionRate": "Ποσοστό ολοκλήρωσης",
            "totalExpenses": "Συνολικά έξοδα",
            "budget": "Κατάσταση προϋπολογισμού",
            "remaining": "απομένουν",
            "loadError": "Αποτυχία φόρτωσης δεδομένων. Βεβαιωθείτε ότι ο διακομιστής λειτουργεί.",
            "retry": "Επανάληψη",
        },
        "tasks": {
            "title": "Εργασίες",
            "empty": "Δεν βρέθηκαν εργασίες.",
            "page": "Σελίδα {page} από {pages}",
        },
        "expenses": {
            "title": "Μηνιαία Επισκόπηση",
            "income": "Έσοδα",
            "expenses": "Έξοδα",
            "savings": "Αποταμιεύσεις",
            "transactions": "Συναλλαγές",
        },
        "settings": {
            "title": "Ρυθμίσεις",
            "darkMode": "Σκοτεινή Λειτουργία",
            "fontSize": "Μέγεθος Γραμματοσειράς",
            "language": "Γλώσσα",
            "small": "Μικρό",
            "medium": "Μεσαίο",
            "large": "Μεγάλο",
            "english": "Αγγλικά",
            "greek": "Ελληνικά",
        },
    },
}


def _lookup(table: dict, path: str):
    node = table
    for key in path.split("."):
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node if isinstance(node, str) else None


def t(path: str, language: str = "en", **fmt) -> str:
    text = (
        _lookup(TRANSLATIONS.get(language, {}), path)
        or _lookup(TRANSLATIONS["en"], path)
        or path
    )
    return text.format(**fmt) if fmt else text
