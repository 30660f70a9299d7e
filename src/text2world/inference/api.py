"""
FastAPI server for text2world.

Provides REST endpoints for world generation and export. Generation runs
synchronously in the worker threadpool; the sampler's request gate keeps
only the newest result.
"""

import argparse
import base64
import io
import time
from typing import Any, Dict, List, Optional

import numpy as np
import uvicorn
from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ..config import RESOLUTION, TERRAIN_SIZE, Settings, configure_logging
from ..engine import HeightmapAnalyzer
from ..engine.structure_placer import STRUCTURE_KEYWORDS
from ..procgen.grammar import OVERRIDE_SPEC
from .sampler import WorldSampler
from .text2param import DIRECTION_KEYWORDS, HEIGHT_KEYWORDS, LAKE_KEYWORDS, RIVER_KEYWORDS, ROUGHNESS_KEYWORDS


# Pydantic models for API
class GenerateRequest(BaseModel):
    prompt: str = Field(..., description="Natural language world description")
    seed: int = Field(42, description="World seed")
    overrides: Optional[Dict[str, Any]] = Field(None, description="Manual zone overrides")
    return_image: bool = Field(False, description="Return base64-encoded PNG heightmap")


class FeatureModel(BaseModel):
    kind: str
    keyword: str
    origin: List[float]
    size: List[float]
    color: str


class MeshSummary(BaseModel):
    vertex_count: int
    triangle_count: int
    resolution: int
    size: float
    material: Dict[str, Any]


class GenerateResponse(BaseModel):
    prompt: str
    seed: int
    published: bool
    zones: Dict[str, Any]
    overrides: Dict[str, float]
    matched_keywords: List[Dict[str, str]]
    features: List[FeatureModel]
    mesh: MeshSummary
    analysis: Dict[str, Any]
    generation_time: float
    heightmap_image: Optional[str] = None  # Base64-encoded PNG


class HealthResponse(BaseModel):
    status: str
    resolution: int
    terrain_size: float
    has_world: bool


def create_app(settings: Settings = None) -> FastAPI:
    """Create FastAPI application."""

    settings = settings or Settings()

    app = FastAPI(
        title="text2world API",
        description="Generate terrain meshes and structures from text prompts",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    sampler = WorldSampler()
    analyzer = HeightmapAnalyzer()
    app.state.sampler = sampler

    @app.get("/health", response_model=HealthResponse)
    def health():
        """Health check endpoint."""

        return HealthResponse(
            status="healthy",
            resolution=RESOLUTION,
            terrain_size=TERRAIN_SIZE,
            has_world=sampler.latest is not None
        )

    @app.post("/generate", response_model=GenerateResponse)
    def generate_world(request: GenerateRequest):
        """Generate a world from a prompt and publish it for export."""

        try:
            start_time = time.time()

            # A superseded request still reports the world it built, unpublished
            world, published = sampler.regenerate(request.prompt, request.seed, request.overrides)

            generation_time = time.time() - start_time

            response = GenerateResponse(
                prompt=world.prompt,
                seed=world.seed,
                published=published,
                zones=world.zones.to_dict(),
                overrides=world.overrides.to_dict(),
                matched_keywords=sampler.parser.explain(world.prompt),
                features=[FeatureModel(**feature.to_dict()) for feature in world.features],
                mesh=MeshSummary(
                    vertex_count=world.mesh.vertex_count,
                    triangle_count=world.mesh.triangle_count,
                    resolution=world.mesh.resolution,
                    size=world.mesh.size,
                    material=world.mesh.material
                ),
                analysis=analyzer.analyze(world.heightmap),
                generation_time=generation_time
            )

            if request.return_image:
                response.heightmap_image = _heightmap_to_base64(world.heightmap)

            return response

        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Generation failed: {str(e)}")

    @app.get("/export/glb")
    def export_glb(include_features: bool = Query(True, description="Include structure nodes")):
        """Binary glTF of the latest world; 204 when nothing was generated."""

        result = sampler.export_glb(include_features=include_features)
        if not result.ok:
            return Response(status_code=204, headers={"X-Export-Status": result.reason})
        return Response(
            content=result.data,
            media_type=result.media_type,
            headers={"Content-Disposition": 'attachment; filename="world.glb"'}
        )

    @app.get("/export/world")
    def export_world(include_features: bool = Query(False, description="Include structure list")):
        """JSON world record of the latest world; 204 when nothing was generated."""

        result = sampler.export_world_json(include_features=include_features)
        if not result.ok:
            return Response(status_code=204, headers={"X-Export-Status": result.reason})
        return Response(content=result.data, media_type=result.media_type)

    @app.get("/parameters")
    def get_parameters():
        """Override ranges and the keyword tables."""

        return {
            "overrides": {
                name: {"min": min_val, "max": max_val, "default": default}
                for name, (min_val, max_val, default) in OVERRIDE_SPEC.params.items()
            },
            "keywords": {
                "height": HEIGHT_KEYWORDS,
                "direction": DIRECTION_KEYWORDS,
                "river": sorted(RIVER_KEYWORDS),
                "lake": sorted(LAKE_KEYWORDS),
                "roughness": ROUGHNESS_KEYWORDS,
                "structures": sorted(STRUCTURE_KEYWORDS),
            },
            "resolution": RESOLUTION,
            "terrain_size": TERRAIN_SIZE
        }

    return app


def _heightmap_to_base64(heightmap: np.ndarray) -> str:
    """Convert heightmap to base64-encoded PNG."""
    from PIL import Image

    # Normalize to [0, 255] for visualization
    normalized = (heightmap - heightmap.min()) / (heightmap.max() - heightmap.min() + 1e-8)
    heightmap_8bit = (normalized * 255).astype(np.uint8)

    image = Image.fromarray(heightmap_8bit)

    buffer = io.BytesIO()
    image.save(buffer, format='PNG')
    buffer.seek(0)

    image_base64 = base64.b64encode(buffer.getvalue()).decode('utf-8')
    return f"data:image/png;base64,{image_base64}"


def main():
    """CLI entry point for API server."""

    settings = Settings()

    parser = argparse.ArgumentParser(description="text2world API Server")
    parser.add_argument("--host", default=settings.api_host, help="Host to bind server")
    parser.add_argument("--port", type=int, default=settings.api_port, help="Port to bind server")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")

    args = parser.parse_args()

    configure_logging(args.log_level)

    print(f"Starting text2world API server...")
    print(f"Server: http://{args.host}:{args.port}")
    print(f"Docs: http://{args.host}:{args.port}/docs")

    app = create_app(settings)

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower()
    )


if __name__ == "__main__":
    main()
