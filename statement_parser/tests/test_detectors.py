"""
Tests for issuer detection.
"""
from ..core.detectors import IssuerDetector, identify_issuer
from ..models.schema import DEFAULT_ASSET_REF, IssuerEntry, IssuerRegistry


class TestIdentifyIssuer:
    """Issuer detection against the bundled registry."""

    def test_unknown_issuer(self, registry):
        match = identify_issuer("Monthly statement\nTotal Due 100.00", registry)

        assert match.issuer == "Unknown"
        assert match.asset_ref == registry.unknown.asset_ref
        assert not match.is_known

    def test_single_issuer(self, registry):
        match = identify_issuer("Welcome to HDFC Bank\nStatement", registry)

        assert match.issuer == "HDFC"
        assert match.asset_ref == registry.get("hdfc").asset_ref
        assert match.is_known

    def test_case_insensitive(self, registry):
        assert identify_issuer("KOTAK MAHINDRA BANK", registry).issuer == "Kotak"
        assert identify_issuer("kotak mahindra bank", registry).issuer == "Kotak"

    def test_registry_order_wins(self, registry):
        """ICICI is registered before HDFC, so it wins wherever it appears."""
        text = "Pay via HDFC Bank netbanking\n...\nICICI Bank Credit Card"

        assert identify_issuer(text, registry).issuer == "ICICI"

    def test_multi_word_key(self, registry):
        assert identify_issuer("Your SBI Card statement", registry).issuer == "SBI"
        # "sbi" alone is not the registered token
        assert identify_issuer("SBI Life Insurance", registry).issuer == "Unknown"

    def test_default_registry(self):
        assert identify_issuer("IndusInd Bank Platinum").issuer == "IndusInd"


class TestIssuerDetector:
    """Detection with substituted registries."""

    def test_fixture_registry(self):
        registry = IssuerRegistry(entries=(
            IssuerEntry(key="Acme", display_name="Acme Card", asset_ref="acme.png"),
        ))
        match = IssuerDetector(registry).detect("ACME statement of account")

        assert match.issuer == "Acme Card"
        assert match.asset_ref == "acme.png"
        assert match.key == "acme"

    def test_empty_registry(self):
        detector = IssuerDetector(IssuerRegistry(entries=()))
        match = detector.detect("ICICI Bank")

        assert match.issuer == "Unknown"
        assert match.asset_ref == DEFAULT_ASSET_REF

    def test_list_issuers(self, registry):
        assert IssuerDetector(registry).list_issuers() == ["SBI", "ICICI", "HDFC", "IndusInd", "Kotak"]
