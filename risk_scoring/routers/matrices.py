"""Risk matrix configuration endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from risk_scoring.database import get_db
from risk_scoring.database.orm import RiskMatrixConfiguration
from risk_scoring.dependencies import get_organization_id
from risk_scoring.models import (
    GenerateLevelsRequest,
    GenerateLevelsResponse,
    MatrixCellScoreRequest,
    MatrixCellScoreResponse,
    MessageResponse,
    RiskMatrixCreate,
    RiskMatrixExport,
    RiskMatrixUpdate,
    ScoreBandExport,
)
from risk_scoring.services import MatrixService, serialize_matrix

router = APIRouter(prefix="/api/v1/risk-matrices", tags=["Risk Matrices"])


def _get_or_404(
    service: MatrixService, db: Session, organization_id: int, matrix_id: str
) -> RiskMatrixConfiguration:
    matrix = service.get_matrix(db, organization_id, matrix_id)
    if matrix is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Risk matrix {matrix_id} not found"
        )
    return matrix


@router.post(
    "",
    response_model=RiskMatrixExport,
    status_code=status.HTTP_201_CREATED,
    summary="Create Risk Matrix"
)
async def create_matrix(
    payload: RiskMatrixCreate,
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    """Create a matrix; levels are generated from the dimensions when omitted."""
    matrix = MatrixService().create_matrix(db, organization_id, payload)
    return serialize_matrix(matrix)


@router.get(
    "",
    response_model=List[RiskMatrixExport],
    summary="List Risk Matrices"
)
async def list_matrices(
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    return [serialize_matrix(matrix) for matrix in MatrixService().list_matrices(db, organization_id)]


@router.get(
    "/active",
    response_model=RiskMatrixExport,
    summary="Get Active Risk Matrix"
)
async def get_active_matrix(
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    matrix = MatrixService().get_active_matrix(db, organization_id)
    if matrix is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No active risk matrix for organization {organization_id}"
        )
    return serialize_matrix(matrix)


@router.post(
    "/generate-levels",
    response_model=GenerateLevelsResponse,
    summary="Generate Matrix Levels",
    description="Preview the level partition for given dimensions without saving anything."
)
async def generate_levels(request: GenerateLevelsRequest):
    service = MatrixService()
    service.check_dimensions(request.rows, request.columns)
    levels = service.generator.generate(
        request.rows, request.columns, request.number_of_levels, request.existing_levels
    )
    return GenerateLevelsResponse(max_score=request.rows * request.columns, levels=levels)


@router.get(
    "/{matrix_id}",
    response_model=RiskMatrixExport,
    summary="Get Risk Matrix"
)
async def get_matrix(
    matrix_id: str,
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    return serialize_matrix(_get_or_404(MatrixService(), db, organization_id, matrix_id))


@router.put(
    "/{matrix_id}",
    response_model=RiskMatrixExport,
    summary="Update Risk Matrix"
)
async def update_matrix(
    matrix_id: str,
    payload: RiskMatrixUpdate,
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    """Rename, resize or relabel a matrix."""
    service = MatrixService()
    matrix = _get_or_404(service, db, organization_id, matrix_id)
    return serialize_matrix(service.update_matrix(db, matrix, payload))


@router.post(
    "/{matrix_id}/activate",
    response_model=RiskMatrixExport,
    summary="Activate Risk Matrix"
)
async def activate_matrix(
    matrix_id: str,
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    """Make this the organization's only active matrix."""
    service = MatrixService()
    matrix = _get_or_404(service, db, organization_id, matrix_id)
    return serialize_matrix(service.activate_matrix(db, matrix))


@router.post(
    "/{matrix_id}/score",
    response_model=MatrixCellScoreResponse,
    summary="Score Matrix Cell"
)
async def score_cell(
    matrix_id: str,
    request: MatrixCellScoreRequest,
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    service = MatrixService()
    matrix = _get_or_404(service, db, organization_id, matrix_id)
    score, level = service.score_cell(matrix, request.likelihood, request.impact)
    return MatrixCellScoreResponse(
        likelihood=request.likelihood,
        impact=request.impact,
        score=score,
        level=ScoreBandExport.model_validate(level) if level is not None else None,
        classified=level is not None,
    )


@router.delete(
    "/{matrix_id}",
    response_model=MessageResponse,
    summary="Delete Risk Matrix"
)
async def delete_matrix(
    matrix_id: str,
    organization_id: int = Depends(get_organization_id),
    db: Session = Depends(get_db),
):
    service = MatrixService()
    service.delete_matrix(db, _get_or_404(service, db, organization_id, matrix_id))
    return MessageResponse(message="Risk matrix deleted", id=matrix_id)
