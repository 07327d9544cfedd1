import importlib

print("Importing fetchers...")
f = importlib.import_module("fetchers")
print("OK")

# Check BASE URLs
assert f.VALUES_BASE.startswith("https://"), "VALUES_BASE must be https"
w = importlib.import_module("worksheet")
for url in w.worksheet_urls(2025, 24):
    assert url.startswith("https://") and url.endswith(".xlsx"), url
print("Base URLs OK")

# Assessment text extraction
vals = f.extract_assessment_values("Total MV: $1,234,567 ... Total AV $45,000")
assert vals == {"marketValue": 1234567, "assessedValue": 45000}, vals
assert f.extract_assessment_values("nothing here") == {"marketValue": 0, "assessedValue": 0}
print("Extractor OK")

# Field formatting
fmt = importlib.import_module("formatting")
cases = {
    ("Adjusted PGI", "123456.7"): "$123,457",
    ("Cap Rate", "0.065"): "6.50%",
    ("Cap Rate", "6.5"): "6.50%",
    ("Owner Name", "Acme LLC"): "Acme LLC",
    ("NOI", None): "",
}
for (field, raw), want in cases.items():
    got = fmt.format_field_value(field, raw)
    assert got == want, (field, raw, got, want)
print("Formatter OK")

# Taxes
t = importlib.import_module("taxes")
assert t.estimate_taxes(100000, 8, 1.05) == 8400
assert t.level_of_assessment(1000, 0) == 0.10
print("Taxes OK")

# PIN helpers
u = importlib.import_module("utils")
assert u.undashed_pin("12-34-567-890-1234") == "12345678901234"
assert u.normalize_pin("12345678901234") == "12-34-567-890-1234"
print("utils OK")

print("All local checks passed ✅")
