import logging
from typing import cast

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from teamsite.api.deps import get_settings_service, get_sitemap_synthesizer
from teamsite.components.settings import SettingsService
from teamsite.components.sitemap import SitemapSynthesizer
from teamsite.domain.entities import SEOSettings

logger = logging.getLogger(__name__)

router = APIRouter()

SITEMAP_CACHE_CONTROL = "public, max-age=3600"
DEFAULT_ROBOTS = "User-agent: *\nAllow: /"
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _sitemap_response(synthesizer: SitemapSynthesizer) -> Response:
    try:
        xml = synthesizer.generate()
    except Exception:
        logger.exception("Sitemap generation failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to generate sitemap"},
        )
    return Response(
        content=xml,
        media_type="application/xml",
        headers={"Cache-Control": SITEMAP_CACHE_CONTROL},
    )


@router.api_route("/api/sitemap", methods=ALL_METHODS, include_in_schema=False)
def sitemap_api(
    request: Request,
    synthesizer: SitemapSynthesizer = Depends(get_sitemap_synthesizer),
) -> Response:
    """Sitemap XML; any method other than GET is rejected with 405."""
    if request.method != "GET":
        return JSONResponse(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            content={"message": "Method not allowed"},
        )
    return _sitemap_response(synthesizer)


@router.get("/sitemap.xml", response_class=Response, summary="XML Sitemap")
def sitemap_xml(synthesizer: SitemapSynthesizer = Depends(get_sitemap_synthesizer)) -> Response:
    return _sitemap_response(synthesizer)


@router.get("/robots.txt", response_class=PlainTextResponse)
def robots_txt(service: SettingsService = Depends(get_settings_service)) -> str:
    """robots.txt from the SEO settings (defaults when unset)."""
    seo = cast(SEOSettings, service.get_model("seo"))
    return (seo.robots_txt or DEFAULT_ROBOTS).rstrip("\n") + "\n"
