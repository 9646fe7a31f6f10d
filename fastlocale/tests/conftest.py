import asyncio
import pytest
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient
from pydantic import BaseModel

from fastlocale import LocaleConfig, LocalePlugin, Views
from fastlocale.catalogs import compile_catalogs

FIXTURES_DIR = Path(__file__).parent / "fixtures"

TRANSLATE_STRING_EN = "All's well that ends well."
TRANSLATE_STRING_DE = "Ende gut, alles gut."
TRANSLATE_STRING_FR = "Tout est bien qui finit bien."


@pytest.fixture(scope="session")
def catalog_directory(tmp_path_factory):
    """Compiled copies of the fixture catalogs"""
    output = tmp_path_factory.mktemp("locales")
    compile_catalogs(FIXTURES_DIR / "locales", output_directory=output)
    return output


@pytest.fixture(scope="session")
def views():
    return Views(FIXTURES_DIR / "views")


@pytest.fixture
def locale_config(catalog_directory):
    return LocaleConfig(
        locales=['de', 'en', 'fr'],
        directory=catalog_directory,
        language_header_field='language',
        query_parameter='lang',
    )


@pytest.fixture
def plugin(locale_config):
    return LocalePlugin(locale_config)


class ValidationPayload(BaseModel):
    param: str


@pytest.fixture
def app(plugin, views):
    """Application exposing the localized routes used by the integration tests"""
    app = FastAPI()
    plugin.register(app)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return PlainTextResponse(request.state.i18n.translate("Validation failed"), status_code=400)

    @app.get("/no/language-code/path/parameter")
    async def no_language_code(request: Request):
        return {
            "locale": request.state.i18n.get_locale(),
            "message": request.state.i18n.translate(TRANSLATE_STRING_EN),
        }

    @app.get("/{languageCode}/localized/resource")
    async def localized_resource(request: Request):
        # yield to other in-flight requests before reading the locale
        await asyncio.sleep(0)
        return {
            "locale": request.state.i18n.get_locale(),
            "requestedLocale": request.path_params["languageCode"],
            "message": request.state.i18n.translate(TRANSLATE_STRING_EN),
        }

    @app.get("/{languageCode}/localized/view")
    async def localized_view(request: Request):
        return views.view("test.html")

    @app.post("/{languageCode}/localized/validation")
    async def localized_validation(payload: ValidationPayload):
        return {"param": payload.param}

    @app.get("/localized/with/headers")
    async def localized_with_headers(request: Request):
        return {
            "locale": request.state.i18n.get_locale(),
            "requestedLocale": request.headers.get("language"),
            "message": request.state.i18n.translate(TRANSLATE_STRING_EN),
        }

    @app.get("/localized/with/query")
    async def localized_with_query(request: Request):
        return {
            "locale": request.state.i18n.get_locale(),
            "requestedLocale": request.query_params.get("lang"),
            "message": request.state.i18n.translate(TRANSLATE_STRING_EN),
        }

    return app


@pytest.fixture
def client(app):
    return TestClient(app)
