import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from jinja2 import TemplateNotFound

from fastlocale.views import ViewResponse


class TestViews:

    def test_view_defers_rendering(self, views):
        response = views.view("greeting.html", {"title": "Home"})

        assert isinstance(response, ViewResponse)
        assert response.variety == "view"
        assert response.rendered is False
        assert response.body == b""

    def test_render_view(self, views, plugin):
        i18n = plugin.i18n.create_context('fr')
        response = views.view("greeting.html", {"title": "Home", "name": "Ada", **i18n.template_context()})

        body = response.render_view()

        assert body == "<p>Home|fr|Bonjour Ada</p>".encode()
        assert response.headers["content-length"] == str(len(body))
        assert response.headers["content-type"] == "text/html; charset=utf-8"

    def test_render_view_once(self, views, plugin):
        response = views.view("greeting.html", {"title": "Home", "name": "Ada", **plugin.i18n.create_context().template_context()})

        first = response.render_view()
        response.context["title"] = "Changed"

        assert response.render_view() is first

    def test_unknown_template(self, views):
        with pytest.raises(TemplateNotFound):
            views.view("missing.html")

    def test_status_code_and_headers(self, views):
        response = views.view("test.html", status_code=201, headers={"X-View": "test"})

        assert response.status_code == 201
        assert response.headers["x-view"] == "test"

    def test_served_by_application(self, views, plugin):
        app = FastAPI()
        plugin.register(app)

        @app.get("/{languageCode}/greeting")
        async def greeting():
            return views.view("greeting.html", {"title": "Home", "name": "Ada", "locale": "overwritten"})

        response = TestClient(app).get("/de/greeting")

        assert response.status_code == 200
        assert response.text == "<p>Home|de|Hallo Ada</p>"
