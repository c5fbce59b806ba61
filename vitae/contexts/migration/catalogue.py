"""
Built-in migration catalogue.

Each entry is (from_version, to_version, transform, description). Transforms are
pure: they receive a record and return a new one.
"""

from typing import Any, Dict


def legacy_to_namespaced(record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a legacy flat record (1.0.0) to the namespaced envelope (0.1.0).

    personal_information -> resume.basics
    work_experience      -> resume.experience
    education            -> resume.education (degree -> studyType, field_of_study -> area)
    skills               -> resume.skills.technical (level defaults to "intermediate")
    certifications       -> resume.certifications
    """
    personal = record.get("personal_information") or {}

    basics = {
        "firstName": personal.get("first_name") or "",
        "lastName": personal.get("last_name") or "",
    }
    if personal.get("email"):
        basics["email"] = personal["email"]
    if personal.get("phone"):
        basics["phone"] = personal["phone"]
    if personal.get("birth_date"):
        basics["birthDate"] = personal["birth_date"]
    if personal.get("full_name"):
        basics["summary"] = f"Resume for {personal['full_name']}"
        if not basics["firstName"] and not basics["lastName"]:
            first, _, last = personal["full_name"].partition(" ")
            basics["firstName"], basics["lastName"] = first, last

    resume: Dict[str, Any] = {"basics": basics}

    if record.get("work_experience"):
        resume["experience"] = []
        for entry in record["work_experience"]:
            item = {
                "position": entry.get("position"),
                "company": entry.get("company"),
                "startDate": entry.get("start_date"),
            }
            if entry.get("end_date"):
                item["endDate"] = entry["end_date"]
            if entry.get("description"):
                item["summary"] = entry["description"]
            resume["experience"].append(item)

    if record.get("education"):
        resume["education"] = []
        for entry in record["education"]:
            item = {
                "institution": entry.get("institution"),
                "studyType": entry.get("degree"),
                "area": entry.get("field_of_study"),
                "startDate": entry.get("start_date"),
            }
            if entry.get("end_date"):
                item["endDate"] = entry["end_date"]
            resume["education"].append(item)

    if record.get("skills"):
        resume["skills"] = {
            "technical": [
                {"name": skill.get("name"), "level": (skill.get("level") or "intermediate").lower()}
                for skill in record["skills"]
            ]
        }

    if record.get("certifications"):
        resume["certifications"] = []
        for entry in record["certifications"]:
            item = {"name": entry.get("name")}
            for legacy_key, key in (
                ("issuer", "issuer"),
                ("date_obtained", "date"),
                ("expiry_date", "expiryDate"),
            ):
                if entry.get(legacy_key):
                    item[key] = entry[legacy_key]
            resume["certifications"].append(item)

    # Drop keys whose values were missing in the source entries
    for section in ("experience", "education"):
        for item in resume.get(section, []):
            for key in [k for k, v in item.items() if v is None]:
                del item[key]

    return {
        "specVersion": "0.1.0",
        "meta": {"language": "en", "country": "US", "source": "legacy-migration"},
        "resume": resume,
    }


BUILTIN_MIGRATIONS = [
    ("1.0.0", "0.1.0", legacy_to_namespaced, "Convert legacy flat format to namespaced envelope"),
]
