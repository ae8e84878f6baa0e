"""
Prompts for the two LLM features.

Sales-trend analyzer: the model gets the two CSV blobs verbatim and must
answer with a JSON object holding exactly three string fields.
Patient update: the model gets one prescription and writes a short message
to the patient, returned as {"message": "..."}.
Anything else fails schema validation.
"""

SYSTEM_PROMPT = """You are an AI assistant helping pharmacy owners optimize their stock levels.

Respond ONLY with a JSON object with exactly these keys, each a single string:
- "highest_demand_medicines"
- "future_stock_predictions"
- "stock_optimization_suggestions"

No markdown code fences, no extra keys, no text outside the JSON object.
Do not give medical advice."""


USER_PROMPT_TEMPLATE = """Analyze the provided sales data and prescription trends to identify which medicines are in highest demand and predict future stock needs.

Sales Data:
{sales_data}

Prescription Trends:
{prescription_trends}

Based on this data, provide:

1. highest_demand_medicines: A list of the top 5 medicines in highest demand, with clear reasons for their demand.
2. future_stock_predictions: Predictions for future stock needs, including any seasonal variations and potential shortages.
3. stock_optimization_suggestions: Specific, actionable suggestions for optimizing stock levels to minimize shortages and maximize sales.

Ensure the output is well-formatted and easy to understand."""


def build_prompt(sales_data: str, prescription_trends: str) -> str:
    return USER_PROMPT_TEMPLATE.format(
        sales_data=sales_data.strip(),
        prescription_trends=prescription_trends.strip(),
    )


PATIENT_UPDATE_SYSTEM_PROMPT = """You write short, friendly messages from a pharmacy to its patients.

Respond ONLY with a JSON object with exactly one key, "message", holding the text to send.
Keep it under 80 words, address the patient by name and sign off with the pharmacy name.
Only state facts given to you. Do not give medical advice or change any dosage."""


# What the patient should hear for each prescription status
STATUS_GUIDANCE = {
    "Pending": "The prescription has been received and is being prepared.",
    "Ready for Pickup": "The prescription is ready to be picked up.",
    "Completed": "The prescription has been collected. Thank the patient.",
    "Out of Stock": "One or more medicines are out of stock. Apologize and say the pharmacy will follow up.",
}


PATIENT_UPDATE_TEMPLATE = """Write an update for this patient about their prescription.

Pharmacy: {pharmacy_name}
Patient: {patient_name}
Prescribing doctor: {doctor_name}
Medicines:
{medicines}
Status: {status}
What to tell them: {guidance}
{note}"""


def build_patient_update_prompt(
    pharmacy_name: str,
    patient_name: str,
    doctor_name: str,
    medicines: list,
    status: str,
    note: str = None,
) -> str:
    lines = []
    for m in medicines:
        dosage = m.get("dosage")
        lines.append(f"- {m['name']} ({dosage})" if dosage else f"- {m['name']}")
    return PATIENT_UPDATE_TEMPLATE.format(
        pharmacy_name=pharmacy_name,
        patient_name=patient_name,
        doctor_name=doctor_name,
        medicines="\n".join(lines) or "- (none listed)",
        status=status,
        guidance=STATUS_GUIDANCE.get(status, "Give a brief status update."),
        note=f"Also mention: {note.strip()}" if note and note.strip() else "",
    ).rstrip()
