# Run Using "flask --app xbm2shader.app run --debug"

import os
import zipfile
from datetime import datetime

from flask import (Blueprint, Flask, current_app, redirect, render_template,
                   request, send_from_directory, url_for)
from werkzeug.utils import secure_filename

from .config import (DEFAULT_BG, DEFAULT_FG, DEFAULT_SHADER_TYPE, PREVIEW_SCALE,
                     PROCESSED_FOLDER, RAW_UPLOAD_FOLDER, ZIPPED_FOLDER)
from .preview import save_preview
from .shader import SHADER_TYPES, ColorError, convert_bitmap
from .xbm import ParseError, read_xbm

bp = Blueprint('converter', __name__)


def convert_upload(filename, shader_type, fg, bg):
    """Convert one saved upload, returning (shader_filename, preview_filename)."""
    input_path = os.path.join(current_app.config['UPLOAD_FOLDER'], filename)
    stem = os.path.splitext(filename)[0]
    shader_filename = stem + '.gdshader'
    preview_filename = stem + '.png'
    processed = current_app.config['PROCESSED_FOLDER']

    bitmap = read_xbm(input_path)
    words, source = convert_bitmap(bitmap, shader_type, fg, bg)

    with open(os.path.join(processed, shader_filename), 'w') as f:
        f.write(source)
    save_preview(os.path.join(processed, preview_filename),
                 bitmap.width, bitmap.height, words, current_app.config['PREVIEW_SCALE'])

    current_app.logger.info("converted %s (%dx%d, %d uints)",
                            filename, bitmap.width, bitmap.height, len(words))
    return shader_filename, preview_filename


@bp.route('/')
def upload_page():
    return render_template("index.html", shader_types=SHADER_TYPES,
                           fg=DEFAULT_FG, bg=DEFAULT_BG)


@bp.route('/success', methods=['POST'])
def success():
    shader_type = request.form.get('type') or DEFAULT_SHADER_TYPE
    fg = request.form.get('fg') or DEFAULT_FG
    bg = request.form.get('bg') or DEFAULT_BG

    def failed(msg):
        return render_template("index.html", shader_types=SHADER_TYPES,
                               fg=fg, bg=bg, error=msg), 400

    if shader_type not in SHADER_TYPES:
        return failed(f"unknown shader type {shader_type!r}")

    converted = []
    for f in request.files.getlist('file'):
        filename = secure_filename(f.filename or '')
        if not filename:
            continue
        f.save(os.path.join(current_app.config['UPLOAD_FOLDER'], filename))
        try:
            converted.append(convert_upload(filename, shader_type, fg, bg))
        except (ParseError, ColorError) as e:
            current_app.logger.warning("%s: %s", filename, e)
            return failed(f"{filename}: {e}")

    if not converted:
        return redirect(url_for('converter.upload_page'))

    if len(converted) == 1:
        shader_filename, preview_filename = converted[0]
        return render_template('converted.html', shader_filename=shader_filename,
                               preview_filename=preview_filename)

    # several files: bundle the shaders and previews into one zip
    timestamp = int(datetime.now().timestamp())
    zip_filename = f'converted_shaders_{timestamp}.zip'
    zip_path = os.path.join(current_app.config['ZIPPED_FOLDER'], zip_filename)

    with zipfile.ZipFile(zip_path, 'w') as zipf:
        for outputs in converted:
            for name in outputs:
                zipf.write(os.path.join(current_app.config['PROCESSED_FOLDER'], name), arcname=name)

    return render_template('download_zip.html', zip_filename=zip_filename,
                           count=len(converted))


@bp.route('/download/<filename>')
def download_file(filename):
    return send_from_directory(os.path.abspath(current_app.config['PROCESSED_FOLDER']),
                               filename, as_attachment=True)


@bp.route('/preview/<filename>')
def preview_file(filename):
    return send_from_directory(os.path.abspath(current_app.config['PROCESSED_FOLDER']), filename)


@bp.route('/download_zip/<filename>')
def download_zip_file(filename):
    return send_from_directory(os.path.abspath(current_app.config['ZIPPED_FOLDER']),
                               filename, as_attachment=True)


def create_app(config=None):
    app = Flask(__name__)
    app.config.from_mapping(
        UPLOAD_FOLDER=RAW_UPLOAD_FOLDER,
        PROCESSED_FOLDER=PROCESSED_FOLDER,
        ZIPPED_FOLDER=ZIPPED_FOLDER,
        PREVIEW_SCALE=PREVIEW_SCALE,
    )
    if config:
        app.config.update(config)

    for key in ('UPLOAD_FOLDER', 'PROCESSED_FOLDER', 'ZIPPED_FOLDER'):
        os.makedirs(app.config[key], exist_ok=True)

    app.register_blueprint(bp)
    return app
