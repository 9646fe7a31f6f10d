import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import jinja2
from starlette.background import BackgroundTask
from starlette.responses import Response
from starlette.templating import Jinja2Templates
from starlette.types import Receive, Scope, Send

# Setup logger
logger = logging.getLogger(__name__)


class ViewResponse(Response):
    """HTML response rendered from a Jinja2 template when it is sent.

    Rendering is deferred so the context can still be changed after the
    endpoint returned, which is what the locale plugin relies on.
    """

    media_type = "text/html"
    variety = "view"

    def __init__(
        self,
        template: jinja2.Template,
        context: Optional[Mapping[str, Any]] = None,
        status_code: int = 200,
        headers: Optional[Mapping[str, str]] = None,
        background: Optional[BackgroundTask] = None,
    ):
        self.template = template
        self.context = dict(context or {})
        self.rendered = False
        super().__init__(None, status_code=status_code, headers=headers, background=background)

    def render_view(self) -> bytes:
        """Render the template once and fix up content-length"""
        if not self.rendered:
            logger.debug(f"Rendering view '{self.template.name}'")
            self.body = self.render(self.template.render(self.context))
            self.headers["content-length"] = str(len(self.body))
            self.rendered = True
        return self.body

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        self.render_view()
        await super().__call__(scope, receive, send)


class Views:
    """Template directory shared by the view responses of an application"""

    def __init__(self, directory: Union[str, Path, os.PathLike]):
        self.directory = Path(directory)
        self.templates = Jinja2Templates(directory=str(self.directory))

        if not self.directory.exists():
            logger.warning(f"Views directory does not exist: {self.directory}")

    def view(
        self,
        name: str,
        context: Optional[Mapping[str, Any]] = None,
        status_code: int = 200,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ViewResponse:
        """Create a view response for the named template"""
        template = self.templates.get_template(name)
        return ViewResponse(template, context, status_code=status_code, headers=headers)
