import logging
from typing import Any, Callable, Coroutine, Optional

from fastapi import FastAPI, Request, Response
from fastapi.routing import APIRoute, APIRouter, request_response
from starlette.exceptions import HTTPException
from starlette.types import ASGIApp, Receive, Scope, Send

from fastlocale.config import ConfigurationError, LocaleConfig
from fastlocale.i18n import I18n, TranslationContext
from fastlocale.views import ViewResponse

# Setup logger
logger = logging.getLogger(__name__)

# Path parameter carrying an explicitly requested locale
LANGUAGE_CODE_PARAMETER = "languageCode"


class LocaleNotAvailable(HTTPException):
    """Raised when a request explicitly asks for a locale that is not configured"""

    def __init__(self, locale: str):
        super().__init__(status_code=404, detail=f"No localization available for {locale}")
        self.locale = locale


class LocalePlugin:
    """Resolves a locale for every request and localizes view responses.

    Two hooks run around each route handler:
    - resolve_locale before the handler, which attaches a fresh
      TranslationContext to request.state.i18n
    - merge_view_context after the handler, which merges that context into
      view responses
    """

    def __init__(self, config: LocaleConfig):
        if config is None:
            raise ConfigurationError("No locales defined!")

        self.config = config
        self.default_locale = config.resolved_default_locale
        self.i18n = I18n(config.directory, config.locales, self.default_locale, domain=config.domain)

    @classmethod
    def from_options(cls, options) -> 'LocalePlugin':
        return cls(LocaleConfig.from_options(options))

    def register(self, app: FastAPI) -> None:
        """Attach the plugin to an application.

        Every APIRoute of the app is localized: routes already declared now,
        routes declared or included later on the next request.
        """
        self.i18n.preload()
        app.state.locale_plugin = self
        app.router.route_class = LocalizedRoute
        localize_routes(app.router)
        app.add_middleware(LocalizeRoutesMiddleware, router=app.router)

        logger.info(f"Registered locale plugin with locales {list(self.config.locales)}, default '{self.default_locale}'")

    def _validated(self, locale: str, source: str) -> str:
        if locale not in self.config.locales:
            logger.info(f"Rejected {source} locale '{locale}', configured locales are {list(self.config.locales)}")
            raise LocaleNotAvailable(locale)
        return locale

    def resolve_locale(self, request: Request) -> TranslationContext:
        """Attach a TranslationContext to the request and set its locale.

        Priority: path parameter, query parameter, header, default. Path and
        query values must be configured locales; header values are taken as
        given.

        Raises:
            LocaleNotAvailable: If the path or query locale is not configured
        """
        # Attached before validation so error handlers can translate too
        i18n = self.i18n.create_context(self.default_locale)
        request.state.i18n = i18n

        query_parameter = self.config.query_parameter
        header_field = self.config.language_header_field

        language_code = request.path_params.get(LANGUAGE_CODE_PARAMETER)
        if language_code:
            i18n.set_locale(self._validated(language_code, "path"))
        elif query_parameter and request.query_params.get(query_parameter):
            i18n.set_locale(self._validated(request.query_params[query_parameter], "query"))
        elif header_field and request.headers.get(header_field):
            language_code = request.headers[header_field]
            if language_code not in self.config.locales:
                logger.warning(f"Accepting unconfigured locale '{language_code}' from header '{header_field}'")
            i18n.set_locale(language_code)

        logger.debug(f"Resolved locale '{i18n.get_locale()}' for {request.method} {request.url.path}")
        return i18n

    def merge_view_context(self, request: Request, response: Optional[Response]) -> Optional[Response]:
        """Merge the request's translation context into a view response.

        Other responses are returned untouched.
        """
        i18n = getattr(request.state, "i18n", None)
        if i18n is None or response is None:
            return response

        if isinstance(response, ViewResponse):
            response.context.update(i18n.template_context())
            response.context["languageCode"] = i18n.get_locale()

        return response


def localized_handler(original_route_handler: Callable[[Request], Coroutine[Any, Any, Response]]) -> Callable[[Request], Coroutine[Any, Any, Response]]:
    """Wrap a route handler with the locale plugin hooks"""

    async def localized_route_handler(request: Request) -> Response:
        plugin = getattr(request.app.state, "locale_plugin", None)
        if plugin is None:
            return await original_route_handler(request)

        plugin.resolve_locale(request)
        response = await original_route_handler(request)
        return plugin.merge_view_context(request, response)

    return localized_route_handler


class LocalizedRoute(APIRoute):
    """APIRoute running the locale plugin hooks around the endpoint"""

    localized = True

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        return localized_handler(super().get_route_handler())


def localize_routes(router: APIRouter) -> int:
    """Install the locale hooks on every APIRoute of a router that lacks them.

    Routes keep their own class, only their ASGI app is rebuilt.

    Returns:
        Number of routes localized
    """
    count = 0
    for route in router.routes:
        if isinstance(route, APIRoute) and not getattr(route, "localized", False):
            route.app = request_response(localized_handler(route.get_route_handler()))
            route.localized = True
            count += 1
            logger.debug(f"Localized route {route.path}")
    return count


class LocalizeRoutesMiddleware:
    """Pure ASGI middleware localizing routes added after registration.

    Routers included with app.include_router keep their own route class, so
    the router is rescanned whenever its route list changed.
    """

    def __init__(self, app: ASGIApp, router: APIRouter) -> None:
        self.app = app
        self.router = router
        # None forces a scan on the first request
        self._route_count = None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and len(self.router.routes) != self._route_count:
            localized = localize_routes(self.router)
            self._route_count = len(self.router.routes)
            if localized:
                logger.info(f"Localized {localized} routes added after registration")

        await self.app(scope, receive, send)


def get_i18n(request: Request) -> TranslationContext:
    """FastAPI dependency returning the request's TranslationContext"""
    i18n = getattr(request.state, "i18n", None)
    if i18n is None:
        raise RuntimeError("No translation context on request, is the locale plugin registered?")
    return i18n
