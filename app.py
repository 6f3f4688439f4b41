import os
from flask import Flask, render_template, request, url_for, current_app, send_from_directory
from jinja2 import TemplateError
from werkzeug.datastructures import CombinedMultiDict
from dotenv import load_dotenv

# Utils
from utils.errors import BarcodeSheetError
from utils.form_utils import parse_barcode_specs, MAX_BARCODES
from utils.layout_utils import compose_sheet, FONT_FAMILIES, DEFAULT_FONT_FAMILY
from utils.storage_utils import save_png, prune_generated

load_dotenv()

app = Flask(__name__)
app.secret_key = os.getenv("SECRET_KEY", "barcode-sheet-secret")

# ---- Output / font config ----
app.config["GENERATED_DIR"] = os.getenv("GENERATED_DIR", os.path.join(app.static_folder, "generated"))
app.config["FONT_DIR"] = os.getenv("FONT_DIR", os.path.join(app.static_folder, "fonts"))
app.config["GENERATED_KEEP"] = int(os.getenv("GENERATED_KEEP", 50))

TEXT_PLAIN = {"Content-Type": "text/plain; charset=utf-8"}


# ===================== HELPERS =====================
def generated_url(filename):
    # generated images live under static/ unless GENERATED_DIR points elsewhere
    out_dir = os.path.abspath(current_app.config["GENERATED_DIR"])
    static_dir = os.path.abspath(current_app.static_folder)
    if os.path.commonpath([out_dir, static_dir]) == static_dir:
        rel = os.path.relpath(os.path.join(out_dir, filename), static_dir)
        return url_for("static", filename=rel.replace(os.sep, "/"))
    return url_for("generated_file", filename=filename)


def form_values():
    # body fields win over query string fields on POST
    return CombinedMultiDict([request.form, request.args])


def build_sheet(form):
    specs = parse_barcode_specs(form)
    cfg = current_app.config
    image = compose_sheet(specs, cfg["FONT_DIR"])
    filename = save_png(image, cfg["GENERATED_DIR"])
    prune_generated(cfg["GENERATED_DIR"], cfg["GENERATED_KEEP"])
    app.logger.info("rendered %d barcode(s) into %s (%dx%d)",
                    len(specs), filename, image.width, image.height)
    return specs, filename


# ===================== ROUTES =====================

# ---- Form
@app.route("/")
def serve_form():
    return render_template("index.html",
                           slots=range(1, MAX_BARCODES + 1),
                           font_families=sorted(FONT_FAMILIES),
                           default_font=DEFAULT_FONT_FAMILY)


# ---- Barcode sheet
@app.route("/barcode", methods=["GET", "POST"])
def generate_barcode():
    try:
        specs, filename = build_sheet(form_values())
    except BarcodeSheetError as e:
        if e.status_code < 500:
            app.logger.warning("barcode request rejected: %s", e.message)
        else:
            app.logger.exception("barcode generation failed")
        return e.message, e.status_code, TEXT_PLAIN

    try:
        return render_template("generated_barcode.html",
                               barcode_path=generated_url(filename),
                               barcodes=specs)
    except TemplateError:
        app.logger.exception("template error")
        return "Error parsing template", 500, TEXT_PLAIN


# ---- Generated files outside static/
@app.route("/generated/<path:filename>")
def generated_file(filename):
    return send_from_directory(os.path.abspath(current_app.config["GENERATED_DIR"]), filename)


# ---- App entry
if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    print(f"Barcode Generator started. Navigate to http://localhost:{port} to generate")
    app.run(host=os.environ.get("HOST", "0.0.0.0"), port=port)
