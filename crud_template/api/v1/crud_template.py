# ==============================================================================
# CRUD TEMPLATE ENDPOINTS - Sample Entity Routes
# ==============================================================================
# The entity shipped with the template, mounted at /v1/crud-template
# ==============================================================================

from __future__ import annotations

from fastapi import Depends

from crud_template.api.crud_controller import CrudController
from crud_template.api.dependencies import (
    get_channel_id,
    get_crud_template_service,
    verify_service_key,
)
from crud_template.core.constants import RouteConstants
from crud_template.core.settings import settings
from crud_template.schemas.crud_template import CrudTemplateCreate, CrudTemplateUpdate

controller = CrudController(
    service_provider=get_crud_template_service,
    name="CrudTemplateController",
    create_schema=CrudTemplateCreate,
    update_schema=CrudTemplateUpdate,
    field_identifier=settings.CRUD_FIELD_IDENTIFIER,
    prefix=f"/v{RouteConstants.CRUD_TEMPLATE_VERSION}/{RouteConstants.CRUD_TEMPLATE_CONTROLLER}",
    tags=[RouteConstants.CRUD_TEMPLATE_TAG],
    dependencies=[Depends(verify_service_key), Depends(get_channel_id)],
)

router = controller.router
