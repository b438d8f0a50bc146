from flask import Blueprint, current_app, render_template

main_bp = Blueprint("main", __name__)

NAV_ITEMS = [
    {"label": "Search", "icon": "search", "href": "/search"},
    {"label": "Menu", "icon": "menu", "href": "#menu"},
]


@main_bp.route("/")
def main_page():
    return render_template(
        "index.html",
        nav_items=NAV_ITEMS,
        icon_url=current_app.config["ICON_RENDERER"].resolver.get_icon_url(),
    )


@main_bp.route("/healthz")
def healthz():
    return ("OK", 200)
