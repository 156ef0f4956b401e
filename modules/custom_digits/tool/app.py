from __future__ import annotations

from fastapi import FastAPI, Form, Request
from fastapi.responses import JSONResponse

from modules.custom_digits.core.backends.registry import BACKENDS
from modules.custom_digits.core.convert import NUMBER_BASES, convert_number
from modules.custom_digits.core.digit_sets import DIGIT_SETS
from modules.custom_digits.core.errors import CustomDigitsError
from modules.custom_digits.core.generate import generate_random_digits
from modules.radix_core.core.logger import setup_logger
from modules.radix_core.core.settings import get_settings

logger = setup_logger()

app = FastAPI(title="Custom Digits")


@app.exception_handler(CustomDigitsError)
async def custom_digits_error_handler(request: Request, exc: CustomDigitsError):
    logger.error(
        "custom_digits_error",
        path=request.url.path,
        code=exc.code,
        detail=exc.detail,
    )
    return JSONResponse(
        {"error": exc.detail, "code": exc.code},
        status_code=exc.status_code,
    )


@app.get("/")
def index():
    settings = get_settings()
    return {
        "module": "custom_digits",
        "bases": list(NUMBER_BASES),
        "backends": sorted(BACKENDS),
        "default_backend": settings.backend,
        "digit_sets": {name: len(digits) for name, digits in DIGIT_SETS.items()},
    }


@app.post("/convert")
def convert(
    value: str | None = Form(None),
    source: str | None = Form("decimal"),
    target: str | None = Form("custom"),
    digits: str | None = Form(None),
    digit_set: str | None = Form(None),
    radix: str | None = Form(None),
    min_digits: str | None = Form(None),
    use_unicode: bool = Form(True),
    backend: str | None = Form(None),
):
    result, error = convert_number(
        value,
        source,
        target,
        digits=digits,
        digit_set=digit_set,
        radix=radix,
        min_digits=min_digits,
        use_unicode=use_unicode,
        backend=backend,
    )
    if error:
        return JSONResponse({"error": error}, status_code=400)
    return result


@app.post("/random")
def random_digits(
    length: str | None = Form(None),
    count: str | None = Form(None),
    digits: str | None = Form(None),
    digit_set: str | None = Form(None),
    radix: str | None = Form(None),
    use_unicode: bool = Form(True),
    backend: str | None = Form(None),
    seed: str | None = Form(None),
):
    result, error = generate_random_digits(
        length,
        count,
        digits=digits,
        digit_set=digit_set,
        radix=radix,
        use_unicode=use_unicode,
        backend=backend,
        seed=seed,
    )
    if error:
        return JSONResponse({"error": error}, status_code=400)
    return result
