"""
Static catalog of store design templates.

Templates are read-only presets. A submission names one by id; the
provisioner reads fonts and grid columns from it when building the store.
"""

from typing import Dict, List, Optional, Literal

from pydantic import BaseModel


class LocalizedText(BaseModel):
    ar: str
    en: str


class TemplateColors(BaseModel):
    primary: str
    secondary: str
    background: str
    text: str
    accent: str


class TemplateFonts(BaseModel):
    primary: str
    secondary: str


class StoreTemplate(BaseModel):
    id: str
    name: LocalizedText
    description: LocalizedText
    category: Literal["modern", "classic", "minimal", "bold"]
    header_style: str
    footer_style: Literal["simple", "detailed", "minimal"]
    grid_columns: int
    colors: TemplateColors
    fonts: TemplateFonts
    features: List[str] = []


def _template(id, name_ar, name_en, desc_ar, desc_en, category, header_style,
              footer_style, grid_columns, colors, fonts, features=()):
    return StoreTemplate(
        id=id,
        name=LocalizedText(ar=name_ar, en=name_en),
        description=LocalizedText(ar=desc_ar, en=desc_en),
        category=category,
        header_style=header_style,
        footer_style=footer_style,
        grid_columns=grid_columns,
        colors=TemplateColors(**dict(zip(
            ("primary", "secondary", "background", "text", "accent"), colors
        ))),
        fonts=TemplateFonts(primary=fonts[0], secondary=fonts[1]),
        features=list(features),
    )


STORE_TEMPLATES: List[StoreTemplate] = [
    _template(
        "modern-ecommerce", "متجر عصري", "Modern Store",
        "تصميم عصري وأنيق مناسب لجميع أنواع المنتجات",
        "Modern and elegant design suitable for all product types",
        "modern", "modern", "detailed", 4,
        ("#FF6B35", "#4A90E2", "#FFFFFF", "#333333", "#F8F9FA"), ("Cairo", "Inter"),
        ("responsive", "seo-optimized", "fast-loading", "mobile-first"),
    ),
    _template(
        "minimal-clean", "متجر بسيط", "Minimal Clean",
        "تصميم بسيط ونظيف يركز على المنتجات",
        "Simple and clean design focused on products",
        "minimal", "minimal", "minimal", 3,
        ("#2D3748", "#718096", "#FFFFFF", "#2D3748", "#F7FAFC"), ("Inter", "Inter"),
        ("minimal-design", "fast-loading", "clean-interface"),
    ),
    _template(
        "classic-traditional", "متجر كلاسيكي", "Classic Traditional",
        "تصميم كلاسيكي مناسب للمتاجر التقليدية",
        "Classic design suitable for traditional stores",
        "classic", "classic", "detailed", 3,
        ("#8B4513", "#D2691E", "#FDF6E3", "#2F1B14", "#F4F1DE"), ("Georgia", "Times New Roman"),
        ("classic-design", "traditional-layout", "reliable"),
    ),
    _template(
        "bold-fashion", "متجر أزياء جريء", "Bold Fashion",
        "تصميم جريء وملفت لمتاجر الأزياء",
        "Bold and eye-catching design for fashion stores",
        "bold", "bold", "detailed", 4,
        ("#E91E63", "#9C27B0", "#FFFFFF", "#212121", "#F8BBD9"), ("Playfair Display", "Open Sans"),
        ("bold-design", "image-focused", "fashion-ready"),
    ),
    _template(
        "tech-modern", "متجر تقني حديث", "Tech Modern",
        "تصميم تقني حديث لمتاجر الإلكترونيات",
        "Modern tech design for electronics stores",
        "modern", "modern", "simple", 4,
        ("#0F172A", "#3B82F6", "#FFFFFF", "#1E293B", "#F1F5F9"), ("Roboto", "Roboto"),
        ("tech-focused", "specs-display", "comparison"),
    ),
    _template(
        "food-delicious", "متجر طعام لذيذ", "Delicious Food",
        "تصميم دافئ وشهي لمتاجر الطعام",
        "Warm and appetizing design for food stores",
        "modern", "modern", "detailed", 3,
        ("#D97706", "#DC2626", "#FFFBEB", "#92400E", "#FEF3C7"), ("Lobster", "Open Sans"),
        ("food-focused", "menu-display", "warm-colors"),
    ),
    _template(
        "modern-comprehensive", "متجر شامل عصري", "Modern Comprehensive Store",
        "قالب شامل وعصري مع جميع الميزات المتقدمة للتجارة الإلكترونية",
        "Comprehensive modern template with all advanced e-commerce features",
        "modern", "modern", "detailed", 4,
        ("#FF6B35", "#4A90E2", "#FFFFFF", "#333333", "#F8F9FA"), ("Cairo", "Inter"),
        ("responsive-design", "seo-optimized", "multi-language", "wishlist", "reviews-system"),
    ),
]

_TEMPLATES_BY_ID: Dict[str, StoreTemplate] = {t.id: t for t in STORE_TEMPLATES}


def find_by_id(template_id: str) -> Optional[StoreTemplate]:
    """Look up a template by id; ``None`` when unknown."""
    return _TEMPLATES_BY_ID.get(template_id)


def list_templates(category: Optional[str] = None) -> List[StoreTemplate]:
    if category:
        return [t for t in STORE_TEMPLATES if t.category == category]
    return list(STORE_TEMPLATES)
