# --- CONFIGURATION ---
DEFAULT_OUTPUT = 'out.gdshader'
DEFAULT_SHADER_TYPE = 'canvas_item'
DEFAULT_FG = '#000000FF'
DEFAULT_BG = '#00000000'

# upload service folders, relative to the working directory
RAW_UPLOAD_FOLDER = 'uploaded_files'
PROCESSED_FOLDER = 'processed_files'
ZIPPED_FOLDER = 'zipped_files'
PREVIEW_SCALE = 4
# ---------------------
