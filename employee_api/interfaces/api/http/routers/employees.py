"""
===============================================================================
TARJETA CRC — employee_api/interfaces/api/http/routers/employees.py
===============================================================================

Class/Module:
    Employees Router

Responsibilities:
    - Exponer CRUD + búsqueda bajo /api/employees.
    - Exigir identidad (Authentication Gate) a nivel router: ninguna ruta
      llega al store sin token válido.
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir EmployeeError -> RFC7807.

Collaborators:
    - employee_api.application.usecases (Create/List/Get/Update/Delete/Search)
    - employee_api.identity.auth_gate.require_identity
    - employee_api.container (factories DI)
    - schemas.employees (DTOs Pydantic)

Notas:
    - /search se registra ANTES de /{record_id}.
    - record_id es str: un id malformado es 404 (no 400).
    - Ninguna ruta agrega Role Gate.
===============================================================================
"""

from __future__ import annotations

from employee_api.application.usecases import (
    CreateEmployeeInput,
    CreateEmployeeUseCase,
    DeleteEmployeeUseCase,
    GetEmployeeUseCase,
    ListEmployeesUseCase,
    SearchEmployeesInput,
    SearchEmployeesUseCase,
    UpdateEmployeeInput,
    UpdateEmployeeUseCase,
)
from employee_api.container import (
    get_create_employee_use_case,
    get_delete_employee_use_case,
    get_get_employee_use_case,
    get_list_employees_use_case,
    get_search_employees_use_case,
    get_update_employee_use_case,
)
from employee_api.crosscutting.sanitize import escape_markup
from employee_api.domain.entities import Employee, EmployeeView
from employee_api.identity.auth_gate import require_identity
from fastapi import APIRouter, Depends, Query, status

from ..error_mapping import raise_employee_error
from ..schemas.employees import (
    CreateEmployeeReq,
    EmployeeEnvelopeRes,
    EmployeeRes,
    EmployeesListRes,
    ManagerRes,
    MessageRes,
    UpdateEmployeeReq,
)

router = APIRouter(
    prefix="/api/employees",
    tags=["employees"],
    dependencies=[Depends(require_identity())],
)


# =============================================================================
# Helpers internos (puros / sin IO)
# =============================================================================


def _to_employee_res(
    employee: Employee, manager: ManagerRes | None = None, *, expand: bool = False
) -> EmployeeRes:
    """
    Mapea entidad de dominio -> DTO HTTP.

    expand=True: `manager` es el resumen (o ausente si no resolvió).
    expand=False: `manager` es el id crudo.
    """
    return EmployeeRes(
        id=employee.id,
        employee_id=employee.employee_id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        email=employee.email,
        phone=employee.phone,
        department=employee.department,
        position=employee.position,
        salary=employee.salary,
        date_of_hire=employee.date_of_hire,
        manager=manager if expand else employee.manager_id,
        status=employee.status,
        created_at=employee.created_at,
        updated_at=employee.updated_at,
    )


def _view_to_res(view: EmployeeView) -> EmployeeRes:
    manager = (
        ManagerRes(
            first_name=view.manager.first_name,
            last_name=view.manager.last_name,
            employee_id=view.manager.employee_id,
        )
        if view.manager is not None
        else None
    )
    return _to_employee_res(view.employee, manager, expand=True)


# =============================================================================
# Endpoints
# =============================================================================


@router.post(
    "",
    response_model=EmployeeEnvelopeRes,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_employee(
    req: CreateEmployeeReq,
    use_case: CreateEmployeeUseCase = Depends(get_create_employee_use_case),
):
    result = use_case.execute(
        CreateEmployeeInput(
            employee_id=req.employee_id,
            first_name=req.first_name,
            last_name=req.last_name,
            email=req.email,
            phone=req.phone,
            department=req.department,
            position=req.position,
            salary=req.salary,
            date_of_hire=req.date_of_hire,
            manager_id=req.manager_id,
            status=req.status,
        )
    )
    if result.error is not None:
        raise_employee_error(result.error)
    return EmployeeEnvelopeRes(employee=_to_employee_res(result.employee))


@router.get("", response_model=EmployeesListRes, response_model_exclude_none=True)
def list_employees(
    use_case: ListEmployeesUseCase = Depends(get_list_employees_use_case),
):
    result = use_case.execute()
    return EmployeesListRes(employees=[_view_to_res(view) for view in result.views])


@router.get(
    "/search", response_model=EmployeesListRes, response_model_exclude_none=True
)
def search_employees(
    department: str | None = Query(None),
    position: str | None = Query(None),
    use_case: SearchEmployeesUseCase = Depends(get_search_employees_use_case),
):
    # R: mismo escape que el body para que los valores guardados coincidan.
    result = use_case.execute(
        SearchEmployeesInput(
            department=escape_markup(department) if department else None,
            position=escape_markup(position) if position else None,
        )
    )
    return EmployeesListRes(
        employees=[_to_employee_res(employee) for employee in result.employees]
    )


@router.get(
    "/{record_id}",
    response_model=EmployeeEnvelopeRes,
    response_model_exclude_none=True,
)
def get_employee(
    record_id: str,
    use_case: GetEmployeeUseCase = Depends(get_get_employee_use_case),
):
    result = use_case.execute(record_id)
    if result.error is not None:
        raise_employee_error(result.error)
    return EmployeeEnvelopeRes(employee=_view_to_res(result.view))


@router.put(
    "/{record_id}",
    response_model=EmployeeEnvelopeRes,
    response_model_exclude_none=True,
)
def update_employee(
    record_id: str,
    req: UpdateEmployeeReq,
    use_case: UpdateEmployeeUseCase = Depends(get_update_employee_use_case),
):
    result = use_case.execute(
        UpdateEmployeeInput(record_id=record_id, changes=req.to_changes())
    )
    if result.error is not None:
        raise_employee_error(result.error)
    return EmployeeEnvelopeRes(employee=_to_employee_res(result.employee))


@router.delete("/{record_id}", response_model=MessageRes)
def delete_employee(
    record_id: str,
    use_case: DeleteEmployeeUseCase = Depends(get_delete_employee_use_case),
):
    result = use_case.execute(record_id)
    if result.error is not None:
        raise_employee_error(result.error)
    return MessageRes(msg="Employee removed")
