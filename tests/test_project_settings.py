"""Tests for clonekit.project_settings."""

from __future__ import annotations

from clonekit.project_settings import read_company_product, set_company_product

from conftest import SETTINGS_TEXT


class TestReadCompanyProduct:
    def test_reads_values(self, tmp_path):
        f = tmp_path / "ProjectSettings.asset"
        f.write_text(SETTINGS_TEXT)
        assert read_company_product(f) == ("Acme", "Rocket")

    def test_missing_file(self, tmp_path):
        assert read_company_product(tmp_path / "nope.asset") == ("", "")

    def test_missing_keys(self, tmp_path):
        f = tmp_path / "ProjectSettings.asset"
        f.write_text("PlayerSettings:\n  other: 1\n")
        assert read_company_product(f) == ("", "")

    def test_value_with_spaces(self, tmp_path):
        f = tmp_path / "ProjectSettings.asset"
        f.write_text("  companyName: Big Studio\n  productName:  Space Game \n")
        assert read_company_product(f) == ("Big Studio", "Space Game")


class TestSetCompanyProduct:
    def test_rewrites_both(self, tmp_path):
        f = tmp_path / "ProjectSettings.asset"
        f.write_text(SETTINGS_TEXT)
        set_company_product(f, "Foo", "Bar")
        assert read_company_product(f) == ("Foo", "Bar")

    def test_other_lines_preserved_in_order(self, tmp_path):
        f = tmp_path / "ProjectSettings.asset"
        f.write_text(SETTINGS_TEXT)
        set_company_product(f, "Foo", "Bar")
        assert f.read_text().splitlines() == [
            "%YAML 1.1",
            "PlayerSettings:",
            "  productGUID: 0123456789abcdef",
            "  companyName: Foo",
            "  productName: Bar",
            "  defaultScreenWidth: 1024",
        ]

    def test_crlf_kept(self, tmp_path):
        f = tmp_path / "ProjectSettings.asset"
        f.write_bytes(b"Player:\r\n  companyName: Acme\r\n  productName: Rocket\r\n")
        set_company_product(f, "Foo", "Bar")
        assert f.read_bytes() == b"Player:\r\n  companyName: Foo\r\n  productName: Bar\r\n"

    def test_no_trailing_newline(self, tmp_path):
        f = tmp_path / "ProjectSettings.asset"
        f.write_text("  companyName: Acme\n  productName: Rocket")
        set_company_product(f, "Foo", "Bar")
        assert f.read_text() == "  companyName: Foo\n  productName: Bar"
