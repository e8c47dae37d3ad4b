from pathlib import Path

from litestar import Litestar, get
from litestar.contrib.jinja import JinjaTemplateEngine
from litestar.response import Template
from litestar.static_files import create_static_files_router  # pyright: ignore[reportUnknownVariableType]
from litestar.template import TemplateConfig

from vite_assets import ViteConfig, VitePlugin

here = Path(__file__).parent


@get("/")
async def index() -> Template:
    return Template(template_name="index.html", context={"title": "Vite + Litestar App"})


vite = VitePlugin(
    config=ViteConfig(
        manifest_path=here / "public" / "build" / ".vite" / "manifest.json",
        hot_file=here / "public" / "hot",
        build_base="/build",
    )
)
templates = TemplateConfig(directory=here / "templates", engine=JinjaTemplateEngine)

app = Litestar(
    route_handlers=[
        index,
        create_static_files_router(path="/build", directories=[here / "public" / "build"], include_in_schema=False),
    ],
    plugins=[vite],
    template_config=templates,
    debug=True,
)
