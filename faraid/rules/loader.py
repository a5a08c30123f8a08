import json
from pathlib import Path
from typing import Any, Dict, List

DATA_DIR = Path(__file__).parent / "data"
RULES_REFERENCE = DATA_DIR / "rules_reference.json"

def load_json(path: str) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)

def load_rules_reference(language: str = "en") -> List[Dict[str, str]]:
    """Rules table rows (heir, condition, share) in the requested language."""
    data = load_json(str(RULES_REFERENCE))
    return [
        {
            "heir": row["heir"].get(language, row["heir"]["en"]),
            "condition": row["condition"].get(language, row["condition"]["en"]),
            "share": row["share"],
        }
        for row in data["rules"]
    ]
