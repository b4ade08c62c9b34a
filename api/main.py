# api/main.py
"""
FastAPI backend for framecalc - exposes the frame analysis pipeline as REST API.
"""

import io
import logging
from typing import Any, Dict, List, Optional, Union

import pandas as pd
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import AliasChoices, BaseModel, Field

from framecalc import __version__
from framecalc.analysis import analyze, PipelineResult
from framecalc.elements import InvalidMemberError
from framecalc.materials import LoadTerm
from framecalc.modelio import load_model, ModelFormatError
from framecalc.solve import UnstableStructureError
from framecalc.tables import result_tables

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="framecalc API",
    description="2D Frame Analysis and Member Checks",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request Models
# =============================================================================

class NodeIn(BaseModel):
    x: float
    y: float
    s: str = Field("f", description="Support: f free, p pinned, r roller, x fixed")
    dx_forced: float = Field(0.0, description="Forced displacement x (mm)")
    dy_forced: float = Field(0.0, description="Forced displacement y (mm)")
    r_forced: float = Field(0.0, description="Forced rotation (rad)")


class WoodIn(BaseModel):
    Fc: float
    Ft: float
    Fb: float
    Fs: float = 0.0


class MemberIn(BaseModel):
    i: int = Field(..., description="Start node (1-based)")
    j: int = Field(..., description="End node (1-based)")
    E: float = Field(205000.0, description="Young's modulus (N/mm²)")
    A: float = Field(..., description="Area (m²)")
    I: float = Field(..., description="Second moment of area (m⁴)")
    Z: float = Field(..., description="Section modulus (m³)")
    i_conn: str = "rigid"
    j_conn: str = "rigid"
    F: Optional[float] = Field(None, description="Design strength (N/mm²)")
    material: Optional[str] = Field(None, description="steel, stainless, aluminum")
    wood: Optional[Union[str, WoodIn]] = None
    density: Optional[float] = Field(None, description="kg/m³")
    ix: Optional[float] = None
    iy: Optional[float] = None


class NodeLoadIn(BaseModel):
    n: int
    px: float = 0.0
    py: float = 0.0
    mz: float = 0.0


class MemberLoadIn(BaseModel):
    m: int
    w: float


class ModelIn(BaseModel):
    nodes: List[NodeIn]
    members: List[MemberIn]
    nl: List[NodeLoadIn] = Field(default_factory=list, validation_alias=AliasChoices("nl", "nodeLoads"))
    ml: List[MemberLoadIn] = Field(default_factory=list, validation_alias=AliasChoices("ml", "memberLoads"))


class AnalyzeRequest(BaseModel):
    model: ModelIn
    self_weight: bool = False
    load_term: LoadTerm = LoadTerm.LONG


# =============================================================================
# Helpers
# =============================================================================

def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """DataFrame rows as JSON-safe dicts (NaN -> None)."""
    return df.astype(object).where(df.notna(), None).to_dict(orient="records")


def run_analysis(request: AnalyzeRequest) -> PipelineResult:
    """Load the compact model and run the pipeline, mapping errors to HTTP codes."""
    try:
        data = load_model(request.model.model_dump(exclude_none=True))
        return analyze(
            data.nodes,
            data.members,
            data.node_loads,
            data.member_loads,
            self_weight=request.self_weight,
            load_term=request.load_term,
        )
    except ModelFormatError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    except InvalidMemberError as e:
        raise HTTPException(
            status_code=422,
            detail={"member": e.member_index + 1, "reason": e.reason},
        )
    except UnstableStructureError as e:
        raise HTTPException(status_code=409, detail=e.diagnostics.to_dict())


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/health")
async def health():
    """Health check."""
    return {"status": "ok", "service": "framecalc API", "version": __version__}


@app.post("/analyze")
async def analyze_model(request: AnalyzeRequest):
    """Solve the model and run section and buckling checks."""
    result = run_analysis(request)
    tables = result_tables(result)
    logger.info(
        "Analyzed %d nodes / %d members (self_weight=%s, load_term=%s)",
        len(result.model.nodes), len(result.model.members),
        request.self_weight, request.load_term.value,
    )
    return {
        "all_ok": result.all_ok,
        "self_weight_total": result.self_weight.total_weight,
        **{name: _records(df) for name, df in tables.items()},
    }


@app.post("/analyze/csv")
async def export_member_forces_csv(request: AnalyzeRequest):
    """Export member end forces as CSV."""
    result = run_analysis(request)
    output = io.StringIO()
    result_tables(result)["member_forces"].to_csv(output, index=False)
    output.seek(0)
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=member_forces.csv"},
    )
