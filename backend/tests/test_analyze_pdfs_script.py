import json

import httpx
import pytest

from scripts.analyze_pdfs import main


@pytest.fixture
def pdf_files(tmp_path, minimal_pdf):
    job = tmp_path / "job.pdf"
    cv = tmp_path / "cv.pdf"
    job.write_bytes(minimal_pdf)
    cv.write_bytes(minimal_pdf)
    return job, cv


def test_posts_both_files_and_prints_summary(pdf_files, analysis_payload, capsys):
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        if request.url.path == "/health":
            return httpx.Response(200, json={"status": "healthy"})
        return httpx.Response(200, json=analysis_payload)

    job, cv = pdf_files
    code = main([str(job), str(cv)], transport=httpx.MockTransport(handler))

    assert code == 0
    assert [r.url.path for r in seen] == ["/health", "/api/analyze"]
    body = seen[1].read()
    assert b'name="jobDescription"' in body
    assert b'name="cv"' in body
    assert "Overall Match: 78%" in capsys.readouterr().out


def test_json_output(pdf_files, analysis_payload, capsys):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=analysis_payload))
    job, cv = pdf_files

    assert main([str(job), str(cv), "--skip-health", "--json"], transport=transport) == 0
    assert json.loads(capsys.readouterr().out) == analysis_payload


def test_error_response_returns_nonzero(pdf_files):
    transport = httpx.MockTransport(
        lambda request: httpx.Response(400, json={"error": "CV PDF error: Invalid PDF format"})
    )
    job, cv = pdf_files
    assert main([str(job), str(cv), "--skip-health"], transport=transport) == 1


def test_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.pdf"), str(tmp_path / "cv.pdf")]) == 2
