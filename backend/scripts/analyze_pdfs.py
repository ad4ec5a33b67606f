"""Submit a job description and a CV to a running server for analysis.

Usage:
    python scripts/analyze_pdfs.py job-description.pdf cv.pdf [--url http://localhost:3000] [--skip-health]
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import httpx

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)

DEFAULT_URL = "http://localhost:3000"
TIMEOUT_SECONDS = 60.0


def check_health(client: httpx.Client) -> dict:
    response = client.get("/health")
    response.raise_for_status()
    return response.json()


def analyze_files(client: httpx.Client, job_description: Path, cv: Path) -> httpx.Response:
    """POST both PDFs as multipart form fields ``jobDescription`` and ``cv``."""
    files = {
        "jobDescription": (job_description.name, job_description.read_bytes(), "application/pdf"),
        "cv": (cv.name, cv.read_bytes(), "application/pdf"),
    }
    return client.post("/api/analyze", files=files)


def print_summary(result: dict) -> None:
    print(f"Overall Match: {result.get('overallMatch')}%")
    print(f"Strengths: {', '.join(result.get('strengths', []))}")
    print(f"Missing Skills: {', '.join(result.get('missingSkills', []))}")
    print(f"Summary: {result.get('summary', '')}")


def main(argv: list[str] | None = None, transport: httpx.BaseTransport | None = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze a CV against a job description")
    parser.add_argument("job_description", type=Path)
    parser.add_argument("cv", type=Path)
    parser.add_argument("--url", default=DEFAULT_URL)
    parser.add_argument("--skip-health", action="store_true")
    parser.add_argument("--json", action="store_true", help="print the raw JSON response")
    args = parser.parse_args(argv)

    for path in (args.job_description, args.cv):
        if not path.is_file():
            logger.error("File not found: %s", path)
            return 2

    with httpx.Client(base_url=args.url, timeout=TIMEOUT_SECONDS, transport=transport) as client:
        try:
            if not args.skip_health:
                health = check_health(client)
                logger.info("Server status: %s", health.get("status"))
            response = analyze_files(client, args.job_description, args.cv)
        except httpx.HTTPError as e:
            logger.error("Request failed: %s", e)
            return 1

    if not response.is_success:
        try:
            error = response.json().get("error", response.text)
        except ValueError:
            error = response.text
        logger.error("Analysis failed (HTTP %d): %s", response.status_code, error)
        return 1

    result = response.json()
    if args.json:
        print(json.dumps(result, indent=2))
    else:
        print_summary(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
