"""Sample sales and prescription-trend data pre-filled in the analyzer form."""
import csv
import io

SALES_DATA = [
    {"medicine_name": "Paracetamol", "brand": "Calpol", "quantity_sold": 120, "date": "2024-01-15"},
    {"medicine_name": "Ibuprofen", "brand": "Advil", "quantity_sold": 80, "date": "2024-01-20"},
    {"medicine_name": "Amoxicillin", "brand": "Generic", "quantity_sold": 50, "date": "2024-02-10"},
    {"medicine_name": "Cetirizine", "brand": "Zyrtec", "quantity_sold": 200, "date": "2024-03-05"},
    {"medicine_name": "Paracetamol", "brand": "Calpol", "quantity_sold": 150, "date": "2024-04-12"},
    {"medicine_name": "Lisinopril", "brand": "Zestril", "quantity_sold": 60, "date": "2024-05-18"},
    {"medicine_name": "Ibuprofen", "brand": "Advil", "quantity_sold": 90, "date": "2024-06-25"},
]

PRESCRIPTION_TREND_DATA = [
    {"medicine_name": "Paracetamol", "doctor_specialty": "General Physician", "frequency": 300, "date": "2024-01-01"},
    {"medicine_name": "Ibuprofen", "doctor_specialty": "Orthopedic", "frequency": 150, "date": "2024-01-01"},
    {"medicine_name": "Amoxicillin", "doctor_specialty": "Pediatrician", "frequency": 120, "date": "2024-02-01"},
    {"medicine_name": "Cetirizine", "doctor_specialty": "Allergist", "frequency": 250, "date": "2024-03-01"},
    {"medicine_name": "Lisinopril", "doctor_specialty": "Cardiologist", "frequency": 180, "date": "2024-05-01"},
]


def _to_csv(header, rows) -> str:
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return output.getvalue()


def sales_data_csv(rows=None) -> str:
    rows = SALES_DATA if rows is None else rows
    return _to_csv(
        ["Medicine Name", "Manufacturer", "Quantity Sold", "Date"],
        ([r["medicine_name"], r["brand"], r["quantity_sold"], r["date"]] for r in rows),
    )


def prescription_trends_csv(rows=None) -> str:
    rows = PRESCRIPTION_TREND_DATA if rows is None else rows
    return _to_csv(
        ["Medicine Name", "Doctor Specialty", "Frequency", "Date"],
        ([r["medicine_name"], r["doctor_specialty"], r["frequency"], r["date"]] for r in rows),
    )
