import io
import zipfile

import pytest

from xbm2shader.app import create_app


@pytest.fixture
def app(tmp_path):
    return create_app({
        'TESTING': True,
        'UPLOAD_FOLDER': str(tmp_path / 'uploaded'),
        'PROCESSED_FOLDER': str(tmp_path / 'processed'),
        'ZIPPED_FOLDER': str(tmp_path / 'zipped'),
    })


@pytest.fixture
def client(app):
    return app.test_client()


def _upload(client, *files, **form):
    data = dict(form)
    data['file'] = [(io.BytesIO(text.encode()), name) for name, text in files]
    return client.post('/success', data=data, content_type='multipart/form-data')


def test_create_app_makes_folders(app, tmp_path):
    for name in ('uploaded', 'processed', 'zipped'):
        assert (tmp_path / name).is_dir()


def test_upload_page(client):
    response = client.get('/')
    assert response.status_code == 200
    assert b'canvas_item' in response.data
    assert b'spatial' in response.data


def test_single_upload(client, tmp_path, square_xbm):
    response = _upload(client, ('square.xbm', square_xbm))
    assert response.status_code == 200
    assert b'square.gdshader' in response.data

    shader = tmp_path / 'processed' / 'square.gdshader'
    assert shader.read_text().startswith('shader_type canvas_item;')
    assert (tmp_path / 'processed' / 'square.png').exists()
    assert (tmp_path / 'uploaded' / 'square.xbm').exists()

    download = client.get('/download/square.gdshader')
    assert download.status_code == 200
    assert b'0x0000EBD7u' in download.data
    assert 'attachment' in download.headers['Content-Disposition']

    assert client.get('/preview/square.png').status_code == 200


def test_upload_with_options(client, tmp_path, square_xbm):
    response = _upload(client, ('square.xbm', square_xbm),
                       type='spatial', fg='#FFFFFFFF', bg='#000000FF')
    assert response.status_code == 200
    source = (tmp_path / 'processed' / 'square.gdshader').read_text()
    assert source.startswith('shader_type spatial;')
    assert 'fg_color = vec4(1,1,1,1);' in source


def test_multiple_uploads_are_zipped(client, tmp_path, square_xbm, smiley_xbm):
    response = _upload(client, ('square.xbm', square_xbm), ('smiley.xbm', smiley_xbm))
    assert response.status_code == 200
    assert b'/download_zip/converted_shaders_' in response.data

    zips = list((tmp_path / 'zipped').iterdir())
    assert len(zips) == 1
    with zipfile.ZipFile(zips[0]) as zipf:
        assert sorted(zipf.namelist()) == [
            'smiley.gdshader', 'smiley.png', 'square.gdshader', 'square.png',
        ]

    download = client.get(f'/download_zip/{zips[0].name}')
    assert download.status_code == 200


def test_parse_error_is_bad_request(client):
    response = _upload(client, ('broken.xbm', '#define broken_width 8\n'))
    assert response.status_code == 400
    assert b'broken.xbm: failed to parse dimensions' in response.data


def test_bad_color_is_bad_request(client, square_xbm):
    response = _upload(client, ('square.xbm', square_xbm), fg='blue')
    assert response.status_code == 400
    assert b'want #RRGGBBAA' in response.data


def test_unknown_shader_type(client, square_xbm):
    response = _upload(client, ('square.xbm', square_xbm), type='particles')
    assert response.status_code == 400


def test_no_files_redirects(client):
    response = client.post('/success', data={}, content_type='multipart/form-data')
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/')


def test_non_utf8_upload(client, tmp_path, latin1_xbm_bytes):
    response = client.post('/success', data={'file': (io.BytesIO(latin1_xbm_bytes), 'cafe.xbm')},
                           content_type='multipart/form-data')
    assert response.status_code == 200
    assert '0x00000007u' in (tmp_path / 'processed' / 'cafe.gdshader').read_text()
