import os

from fastapi.templating import Jinja2Templates

from shared.catalog import lookup

template_dir = os.path.join(os.path.dirname(__file__), "templates")
templates = Jinja2Templates(directory=template_dir)
templates.env.globals["lookup"] = lookup
