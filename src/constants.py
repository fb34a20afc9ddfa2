ROLES = [
    {"id": "top", "label": "Top Lane"},
    {"id": "jungle", "label": "Jungle"},
    {"id": "mid", "label": "Mid Lane"},
    {"id": "bot", "label": "Bot (ADC)"},
    {"id": "support", "label": "Support"},
]

ROLE_IDS = [role["id"] for role in ROLES]
