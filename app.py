#!/usr/bin/env python3
"""
PDF Spread Production – Web service.

Run:
    python app.py

Then POST a PDF to http://localhost:5000/api/spread
"""

import os
import uuid
import base64
import tempfile
from flask import Flask, request, jsonify, send_file

from pikepdf import Pdf
import fitz  # pymupdf – for thumbnail rendering

from pdf_spread_production import (
    DEFAULT_BLEED,
    generate_spread_pdf,
    sanitize_file_name,
    spread_spec_for,
    verify_page,
)

# ── Constants ─────────────────────────────────────────────────────────────────
PORT = int(os.environ.get("PORT", 5000))
THUMBNAIL_DPI = 72

app = Flask(__name__)

UPLOAD_DIR = os.path.join(tempfile.gettempdir(), "pdf_spread_uploads")
os.makedirs(UPLOAD_DIR, exist_ok=True)


def render_thumbnails(pdf_path, dpi=THUMBNAIL_DPI):
    """Return list of base64-encoded PNG thumbnails, one per page."""
    doc = fitz.open(pdf_path)
    thumbs = []
    for page in doc:
        zoom = dpi / 72.0
        mat = fitz.Matrix(zoom, zoom)
        pix = page.get_pixmap(matrix=mat, alpha=False)
        png_data = pix.tobytes("png")
        b64 = base64.b64encode(png_data).decode("ascii")
        thumbs.append(b64)
    doc.close()
    return thumbs


def valid_job_id(job_id):
    return bool(job_id) and job_id.isalnum() and len(job_id) == 8


def process_spread_file(input_path, output_path, bleed, extra_gutter,
                        cover_alone=False):
    """Compose spreads for one uploaded file, verify them, render previews."""
    with open(input_path, "rb") as f:
        data = f.read()

    with Pdf.open(input_path) as src:
        spec = spread_spec_for(src, bleed, extra_gutter)

    result = generate_spread_pdf(data, bleed=bleed, extra_gutter=extra_gutter,
                                 cover_alone=cover_alone)
    with open(output_path, "wb") as f:
        f.write(result)

    verification = []
    with Pdf.open(output_path) as out:
        for i, page in enumerate(out.pages):
            checks = verify_page(page, spec)
            all_pass = all(c["pass"] for c in checks)
            verification.append({"page": i + 1, "checks": checks,
                                 "all_pass": all_pass})

    return {
        "spread_count": len(verification),
        "spread_size": f"{spec.width/72:.4f}\" x {spec.height/72:.4f}\"",
        "verification": verification,
        "thumbnails": render_thumbnails(output_path),
    }


# ── Routes ────────────────────────────────────────────────────────────────────

@app.route("/api/spread", methods=["POST"])
def api_spread():
    """Upload a PDF and compose it into printer spreads."""
    if "file" not in request.files:
        return jsonify({"error": "No file uploaded"}), 400
    file = request.files["file"]
    if not file.filename or not file.filename.lower().endswith(".pdf"):
        return jsonify({"error": "Please upload a PDF file"}), 400

    try:
        bleed = float(request.form.get("bleed", DEFAULT_BLEED))
        extra_gutter = float(request.form.get("extra_gutter", 0))
    except ValueError:
        return jsonify({"error": "bleed and extra_gutter must be numbers"}), 400
    if bleed < 0:
        return jsonify({"error": "bleed must not be negative"}), 400

    cover_alone = request.form.get("cover_alone", "false") == "true"

    job_id = str(uuid.uuid4())[:8]
    job_dir = os.path.join(UPLOAD_DIR, job_id)
    os.makedirs(job_dir, exist_ok=True)
    input_path = os.path.join(job_dir, "input.pdf")
    output_path = os.path.join(job_dir, "output.pdf")
    file.save(input_path)

    try:
        result = process_spread_file(input_path, output_path, bleed,
                                     extra_gutter, cover_alone=cover_alone)
    except Exception as e:
        return jsonify({"error": str(e)}), 500

    result["job_id"] = job_id
    result["filename"] = sanitize_file_name(file.filename)
    return jsonify(result)


@app.route("/api/download/<job_id>")
def api_download(job_id):
    if not valid_job_id(job_id):
        return jsonify({"error": "Invalid job ID"}), 400
    output_path = os.path.join(UPLOAD_DIR, job_id, "output.pdf")
    if not os.path.isfile(output_path):
        return jsonify({"error": "File not found"}), 404

    download_name = sanitize_file_name(request.args.get("name", "output"))
    return send_file(output_path, as_attachment=True, download_name=download_name)


@app.route("/health")
def health():
    return "Server is alive!"


if __name__ == "__main__":
    print("PDF Spread Production service")
    print(f"Listening on http://localhost:{PORT}")
    app.run(host="0.0.0.0", port=PORT, debug=False)
