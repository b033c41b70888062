"""
Report layout strategies.

``TEMPLATE_STRATEGIES`` maps each template identifier to the strategy
class that renders it.
"""

from typing import Dict, Type

from evidence_report.models import TemplateId
from evidence_report.templates.base import ReportTemplate, format_report_date
from evidence_report.templates.classic import ClassicTemplate
from evidence_report.templates.creative import CreativeTemplate
from evidence_report.templates.dynamic import DynamicTemplate
from evidence_report.templates.modern import ModernTemplate
from evidence_report.templates.pagination import Paginator

TEMPLATE_STRATEGIES: Dict[TemplateId, Type[ReportTemplate]] = {
    TemplateId.CLASSIC: ClassicTemplate,
    TemplateId.MODERN: ModernTemplate,
    TemplateId.CREATIVE: CreativeTemplate,
    TemplateId.CUSTOM: DynamicTemplate,
}

__all__ = [
    "ClassicTemplate",
    "CreativeTemplate",
    "DynamicTemplate",
    "ModernTemplate",
    "Paginator",
    "ReportTemplate",
    "TEMPLATE_STRATEGIES",
    "format_report_date",
]
