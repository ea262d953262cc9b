from typing import Dict, List

ANOMALY_CATALOGUE: Dict[str, Dict[str, str]] = {
    "Violence & Aggression": {
        "Physical_Assault": "One or more people physically attacking another.",
        "Weapon_Visible": "A knife, gun, or other weapon is clearly visible.",
        "Fighting": "A group or individuals engaged in a brawl.",
        "Hostage_Situation": "Someone being held against their will.",
        "Domestic_Violence": "Physical altercation in a domestic setting.",
    },
    "Medical Emergencies": {
        "Person_Collapsed": "A person suddenly falling or lying unresponsive.",
        "Seizure_Activity": "Someone exhibiting seizure-like movements.",
        "Unconscious_Person": "A person who is not moving and appears unconscious.",
        "Excessive_Bleeding": "Visible signs of significant blood loss.",
        "Overdose_Suspected": "Signs of a potential drug overdose.",
    },
    "Public Safety Threats": {
        "Crowd_Stampede": "A large crowd moving in a panicked, uncontrolled manner.",
        "Riots_Or_Protest_Violence": "A protest that has turned violent, with property damage or fighting.",
        "Vandalism_In_Progress": "Active destruction or defacement of property.",
        "Arson": "The act of deliberately setting fire to property.",
        "Explosion_Or_Smoke": "A sudden explosion or a large volume of smoke indicating a potential fire.",
    },
    "Suspicious Behavior": {
        "Loitering_With_Intent": "Lingering in a sensitive area with no clear purpose.",
        "Unauthorized_Access": "Entering a restricted zone.",
        "Stalking_Behavior": "Following someone persistently.",
        "Abandoned_Baggage": "A bag or package left unattended in a high-traffic area.",
        "Drug_Deal_Suspected": "Behavior indicative of an illegal drug transaction.",
    },
    "Traffic & Road Incidents": {
        "Reckless_Driving": "A vehicle being driven in a highly dangerous manner.",
        "Hit_And_Run": "A vehicle collision where one party leaves the scene.",
        "Pedestrian_In_Danger": "A pedestrian at immediate risk of being hit by a vehicle.",
        "Accident_With_Injuries": "A traffic accident where people are visibly injured.",
        "Drunk_Person_Driving": "A person exhibiting signs of intoxication while operating a vehicle.",
    },
    "Theft & Crime": {
        "Shoplifting": "Concealing store items with the intent to steal.",
        "Pickpocketing": "Stealing from a person's pocket or bag.",
        "Burglary_In_Progress": "Unlawful entry into a building with intent to commit a crime.",
        "Car_Theft": "The act of stealing a motor vehicle.",
        "Robbery": "Forcibly taking property from another person.",
    },
    "Fire & Hazards": {
        "Fire_Outbreak": "Visible flames indicating an uncontrolled fire.",
        "Gas_Leak_Suspected": "Signs that might indicate a gas leak (e.g., people reacting).",
        "Electrical_Spark_Hazard": "Visible and dangerous electrical arcing.",
        "Flammable_Materials_Exposed": "Improperly stored or handled flammable materials posing a risk.",
    },
    "Child & Vulnerable Person Alerts": {
        "Lost_Child": "A young child appearing alone and distressed.",
        "Child_Abduction_Attempt": "An attempt to forcibly take a child.",
        "Elderly_Person_Fallen": "An elderly person who has fallen and cannot get up.",
        "Disabled_Person_In_Distress": "A person with a disability in a dangerous or difficult situation.",
    },
    "Public Nuisance & Disorder": {
        "Public_Intoxication": "An individual who is clearly drunk and disorderly in public.",
        "Harassment": "Unwanted and aggressive verbal or physical interaction.",
        "Indecent_Exposure": "Exposure of private body parts in public.",
        "Noise_Disturbance_Violence": "A noise complaint that is escalating to violence.",
    },
    "Infrastructure Failures": {
        "Building_Collapse_Risk": "Visible structural damage to a building.",
        "Road_Blockage_Hazard": "An obstruction on the road that poses a danger.",
        "Broken_Escalator_Elevator": "A malfunctioning escalator or elevator with people in danger.",
        "Water_Leak_Flooding": "A major water leak leading to flooding.",
    },
    "Normal Activity": {
        "Normal_Activity": "No significant anomalies or threats detected. Standard public or private behavior.",
    },
}

DEPARTMENTS_LIST: List[str] = [
    "Police",
    "Fire & Rescue",
    "Emergency Medical Services",
    "Traffic Police",
    "Disaster Management",
    "Municipal Services",
]

REPORT_INCIDENT_TYPES = [
    "Violent Crime",
    "Medical Emergency",
    "Fire Alert",
    "Traffic Accident",
    "Suspicious Activity",
    "Public Safety Threat",
    "Other",
]


def anomaly_definitions() -> str:
    lines = []
    for i, (group, keys) in enumerate(ANOMALY_CATALOGUE.items(), start=1):
        lines.append(f"{i}. {group}")
        for key, desc in keys.items():
            lines.append(f"   - {key}: {desc}")
        lines.append("")
    return "\n".join(lines).rstrip()


CLASSIFY_PROMPT = """
You are the video triage model for a city public safety platform.

You will be given a SHORT video from a street camera or an operator upload.
Watch the entire video and decide whether it shows a significant anomaly.

ANOMALY CATALOGUE:
{definitions}

Return STRICT JSON ONLY:
{{
  "isSignificant": true|false,
  "incidentType": "the single most critical anomaly key from the catalogue, or Normal_Activity"
}}

Rules:
- Use ONLY keys from the catalogue, spelled exactly as listed.
- If nothing significant is happening, set isSignificant=false and incidentType=Normal_Activity.
- Do not guess beyond what is visible.
JSON only. No markdown.
"""

REPORT_PROMPT = """
You are an AI assistant for a public safety platform. Analyze the provided video of an incident.

Watch the entire video carefully and return STRICT JSON ONLY:
{{
  "report": "clear, concise summary of what happens in the video: key events, people, objects, environment",
  "incidentType": "{incident_types}",
  "suggestedDepartment": "{departments}"
}}

Rules:
- incidentType: the most significant event category. If nothing significant happens, use Normal.
- suggestedDepartment: the single most appropriate department. If Normal, use None.
JSON only. No markdown.
"""


def render_classify_prompt() -> str:
    return CLASSIFY_PROMPT.format(definitions=anomaly_definitions())


def render_report_prompt() -> str:
    return REPORT_PROMPT.format(
        incident_types="|".join(REPORT_INCIDENT_TYPES + ["Normal"]),
        departments="|".join(DEPARTMENTS_LIST + ["None"]),
    )
