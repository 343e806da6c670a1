from docsync.templates.loader import DocumentTemplate, TemplateInfo, list_templates, load_template

__all__ = ["DocumentTemplate", "TemplateInfo", "list_templates", "load_template"]
