"""
Patient update drafter: one prescription in, a friendly message to the patient out.

The owner reviews the draft and sends it themselves; nothing is stored or sent here.
"""
import json
import logging
from typing import Optional

from mediserve.ai.groq_client import GroqClient, get_groq_client, strip_code_fence
from mediserve.ai.prompts import PATIENT_UPDATE_SYSTEM_PROMPT, build_patient_update_prompt
from mediserve.core.exceptions import PatientUpdateError

logger = logging.getLogger(__name__)


def parse_patient_message(raw: str) -> str:
    try:
        data = json.loads(strip_code_fence(raw))
    except json.JSONDecodeError as e:
        raise PatientUpdateError(f"LLM reply is not valid JSON: {e}") from e

    message = data.get("message") if isinstance(data, dict) else None
    if not isinstance(message, str) or not message.strip():
        raise PatientUpdateError("LLM reply has no message")
    return message.strip()


def draft_patient_update(
    prescription,
    pharmacy_name: str,
    note: Optional[str] = None,
    client: Optional[GroqClient] = None,
) -> str:
    client = client or get_groq_client()
    if not client.is_available():
        raise PatientUpdateError("LLM client is not configured")

    prompt = build_patient_update_prompt(
        pharmacy_name=pharmacy_name,
        patient_name=prescription.patient_name,
        doctor_name=prescription.doctor_name,
        medicines=prescription.medicines or [],
        status=prescription.status,
        note=note,
    )
    raw = client.complete_json(PATIENT_UPDATE_SYSTEM_PROMPT, prompt)
    if raw is None:
        raise PatientUpdateError("LLM call failed")

    message = parse_patient_message(raw)
    logger.info(f"Drafted patient update for prescription #{prescription.id}")
    return message
