"""Deal pipeline, contract and quote endpoints."""

from uuid import UUID

from fastapi import status

from src.crm.api.dependencies import CurrentUser, DealServiceDep
from src.crm.api.dependencies.services import (
    get_contract_service,
    get_deal_service,
    get_quote_service,
)
from src.crm.api.v1.crud import build_crud_router
from src.crm.core.exceptions import raise_http_error
from src.crm.schemas.deal import (
    ContractCreate,
    ContractDraft,
    ContractRead,
    ContractUpdate,
    DealConvertResult,
    DealCreate,
    DealMove,
    DealMoveResult,
    DealRead,
    DealUpdate,
    QuoteCreate,
    QuoteRead,
    QuoteUpdate,
)

deals_router = build_crud_router(
    prefix="deals",
    label="Deal",
    get_service=get_deal_service,
    create_schema=DealCreate,
    update_schema=DealUpdate,
    read_schema=DealRead,
)

contracts_router = build_crud_router(
    prefix="contracts",
    label="Contract",
    get_service=get_contract_service,
    create_schema=ContractCreate,
    update_schema=ContractUpdate,
    read_schema=ContractRead,
)

quotes_router = build_crud_router(
    prefix="quotes",
    label="Quote",
    get_service=get_quote_service,
    create_schema=QuoteCreate,
    update_schema=QuoteUpdate,
    read_schema=QuoteRead,
)


@deals_router.post(
    "/{deal_id}/move",
    response_model=DealMoveResult,
    summary="Move deal to a stage",
    description=(
        "Set status and probability. Reaching probability 100 or status won "
        "returns a contract draft prefilled from the deal."
    ),
    responses={404: {"description": "Deal not found"}},
)
async def move_deal(
    deal_id: UUID,
    request: DealMove,
    user: CurrentUser,
    service: DealServiceDep,
) -> DealMoveResult:
    try:
        deal, points, draft = await service.move(
            deal_id, request.status, request.probability, user.id
        )
    except ValueError as e:
        raise_http_error(e)
    return DealMoveResult(
        deal=DealRead.model_validate(deal),
        points_awarded=points,
        contract_draft=ContractDraft(**draft) if draft else None,
    )


@deals_router.post(
    "/{deal_id}/convert",
    response_model=DealConvertResult,
    status_code=status.HTTP_201_CREATED,
    summary="Convert deal to contract",
    responses={
        404: {"description": "Deal not found"},
        409: {"description": "Deal already has a contract"},
    },
)
async def convert_deal(
    deal_id: UUID,
    user: CurrentUser,
    service: DealServiceDep,
) -> DealConvertResult:
    try:
        contract, points = await service.convert(deal_id, user.id)
    except ValueError as e:
        raise_http_error(e)
    return DealConvertResult(contract=ContractRead.model_validate(contract), points_awarded=points)
