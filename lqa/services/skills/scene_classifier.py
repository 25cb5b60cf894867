from types import MappingProxyType
from typing import Mapping, Tuple

from lqa.services.skills.skill_models import SceneType


# Schlüsselwörter pro Szene (EN + ZH, da Dateinamen/Hints gemischt vorkommen).
# Die Reihenfolge der Einträge entscheidet bei Gleichstand.
SCENE_KEYWORDS: Mapping[SceneType, Tuple[str, ...]] = MappingProxyType({
    SceneType.NAVIGATION: (
        "nav", "menu", "sidebar", "breadcrumb", "header", "tab", "toolbar", "navigation",
        "导航", "菜单", "标签栏",
    ),
    SceneType.FORM: (
        "form", "input", "field", "submit", "login", "signup", "register", "password",
        "email", "search", "表单", "输入", "登录",
    ),
    SceneType.DASHBOARD: (
        "dashboard", "analytics", "chart", "graph", "kpi", "metric", "overview", "stats",
        "仪表板", "概览", "统计",
    ),
    SceneType.MODAL: (
        "modal", "dialog", "popup", "confirm", "alert", "overlay", "弹窗", "对话框", "确认",
    ),
    SceneType.TABLE: (
        "table", "grid", "list", "column", "row", "data", "sort", "filter", "表格", "列表", "数据",
    ),
    SceneType.SETTINGS: (
        "setting", "preference", "config", "option", "account", "profile", "toggle", "switch",
        "设置", "偏好", "配置",
    ),
    SceneType.ERROR_PAGE: (
        "error", "404", "500", "not found", "oops", "something went wrong", "错误", "未找到",
    ),
})


def detect_scene_type(text: str) -> SceneType:
    """
    Ordnet einen freien Text (Dateiname, Szenenbeschreibung, ...) einer Szene zu.

    Gezählt wird pro Szene, wie viele Keywords als Substring vorkommen.
    Gewinnt die Szene mit dem höchsten Treffer-Count > 0; bei Gleichstand
    bleibt die zuerst gefundene. Ohne Treffer: GENERIC.
    """
    lower = (text or "").lower()
    best_scene = SceneType.GENERIC
    best_score = 0

    for scene, keywords in SCENE_KEYWORDS.items():
        score = sum(1 for kw in keywords if kw in lower)
        if score > best_score:
            best_score = score
            best_scene = scene

    return best_scene
