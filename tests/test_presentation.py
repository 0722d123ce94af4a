from fxconvert.models.constants import currency_info, display_name
from fxconvert.models.conversion import ConversionResult
from fxconvert.routers.ui import format_number, render_alert, render_result


def test_symbol_table_lookup():
    assert currency_info("usd").symbol == "$"
    assert currency_info("XYZ") is None
    assert display_name("XYZ") == "XYZ"


def test_render_result_contains_names_amount_and_rate():
    html = render_result(
        ConversionResult(
            from_currency="USD",
            to_currency="JPY",
            amount=2.5,
            converted_amount=375.0,
            effective_rate=150.0,
        )
    )
    assert "2.5 US Dollar = 375.00 Japanese Yen" in html
    assert "1 US Dollar = 150 Japanese Yen" in html


def test_render_result_unknown_code_falls_back_to_code():
    html = render_result(
        ConversionResult(
            from_currency="AUD", to_currency="USD", amount=1, converted_amount=0.66, effective_rate=0.66
        )
    )
    assert "1 AUD = 0.66 US Dollar" in html


def test_alert_escapes_html():
    assert "<script>" not in render_alert("<script>alert(1)</script>")


def test_format_number():
    assert format_number(150.0) == "150"
    assert format_number(1 / 7) == "0.142857"
    assert format_number(1234567.5) == "1,234,567.5"
