"""Static reference data for the in-process reference tables."""

from seap_gateway.domain.entities import BankProfile, DelinquencyRecord

DEFAULT_BANKS = (
    BankProfile(id="nacion", name="Banco Nación", has_restrictions=False, risk_tier=1, requires_account=False),
    BankProfile(id="macro", name="Banco Macro", has_restrictions=True, risk_tier=2, requires_account=True),
    BankProfile(id="santander", name="Banco Santander", has_restrictions=False, risk_tier=2, requires_account=False),
    BankProfile(id="galicia", name="Banco Galicia", has_restrictions=False, risk_tier=2, requires_account=False),
    BankProfile(id="bbva", name="BBVA", has_restrictions=True, risk_tier=3, requires_account=False),
    BankProfile(id="icbc", name="ICBC", has_restrictions=False, risk_tier=1, requires_account=False),
    BankProfile(id="supervielle", name="Banco Supervielle", has_restrictions=False, risk_tier=2, requires_account=False),
)

DEFAULT_DELINQUENT_PROFILES = (
    DelinquencyRecord(national_id="12345678", has_active_debt=True, amount=50_000),
    DelinquencyRecord(national_id="87654321", has_active_debt=False, amount=0),
    DelinquencyRecord(national_id="11223344", has_active_debt=True, amount=25_000),
)

PROVINCES = (
    "Buenos Aires",
    "CABA",
    "Córdoba",
    "Santa Fe",
    "Mendoza",
    "Tucumán",
    "Entre Ríos",
    "Salta",
    "Misiones",
    "Chaco",
    "Corrientes",
    "Santiago del Estero",
    "San Juan",
    "Jujuy",
    "Río Negro",
)
