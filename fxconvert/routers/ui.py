import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from fxconvert.core.config import Settings
from fxconvert.core.errors import ConversionError, InvalidAmountError
from fxconvert.models.constants import CURRENCY_SYMBOLS, display_name
from fxconvert.models.conversion import ConversionResult
from fxconvert.services.rates import ConversionService, parse_amount
from .deps import get_app_settings, get_conversion_service

logger = logging.getLogger("fxconvert.ui")

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def format_number(value: float, places: int = 6) -> str:
    text = f"{value:,.{places}f}"
    return text.rstrip("0").rstrip(".") if "." in text else text


def format_money(value: float) -> str:
    return f"{value:,.2f}"


templates.env.filters["number"] = format_number
templates.env.filters["money"] = format_money


def render_result(result: ConversionResult) -> str:
    """HTML fragment describing a finished conversion."""
    return templates.get_template("_result.html").render(
        amount=result.amount,
        converted_amount=result.converted_amount,
        effective_rate=result.effective_rate,
        from_name=display_name(result.from_currency),
        to_name=display_name(result.to_currency),
    )


def render_alert(message: str) -> str:
    return templates.get_template("_alert.html").render(message=message)


@router.get("/", response_class=HTMLResponse)
@router.get("/ui", response_class=HTMLResponse)
async def ui_home(request: Request, settings: Settings = Depends(get_app_settings)):
    return templates.TemplateResponse(
        request,
        "convert.html",
        {
            "app_name": settings.app_name,
            "version": settings.version,
            "currencies": CURRENCY_SYMBOLS,
            "default_from": "CNY",
            "default_to": "USD",
        },
    )


@router.post("/ui/convert", response_class=HTMLResponse)
def ui_convert(
    from_currency: str = Form(...),
    to_currency: str = Form(...),
    amount: str = Form(""),
    service: ConversionService = Depends(get_conversion_service),
):
    try:
        result = service.convert(from_currency, to_currency, parse_amount(amount))
    except InvalidAmountError as e:
        logger.info("rejected amount: %s", e.message)
        return HTMLResponse(render_alert(e.user_message))
    except ConversionError as e:
        logger.warning(
            "conversion %s->%s failed: %s",
            from_currency,
            to_currency,
            e.message,
            extra={"error_code": e.code},
        )
        return HTMLResponse(render_alert(e.user_message))
    return HTMLResponse(render_result(result))
