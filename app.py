import logging

import flask
import requests
from flask import Flask, request, render_template, jsonify, send_from_directory
from flask_cors import CORS
from flask_caching import Cache

import settings
from flickr_stream import FlickrStreamApi, result_kind, CACHE_PERMANENT
from imagecache import ImageCache
from image_styles import ImageStyles, UnknownImageStyle

from werkzeug.middleware.proxy_fix import ProxyFix

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = Flask(__name__)
app.config.from_object(settings)
CORS(app)
cache = Cache(app)
app.wsgi_app = ProxyFix(app.wsgi_app)

http_client = requests.Session()
image_cache = ImageCache(app.config, http_client)
image_styles = ImageStyles(image_cache)
stream_api = FlickrStreamApi(app.config, http_client, logging.getLogger("flickr_stream"),
                             image_cache=image_cache, image_styles=image_styles)

# a year, for render output the session can keep until it changes
PERMANENT_MAX_AGE = 31536000


@app.route('/')
def index():
    return render_template("index.html", styles=image_styles.names())


@app.route('/album/<user_id>/<photoset_id>')
def album_stream(user_id, photoset_id):
    return render_stream("album", user_id, photoset_id)


@app.route('/user/<user_id>')
def user_stream(user_id):
    return render_stream("user", user_id)


@app.route('/album_raw/<user_id>/<photoset_id>')
def album_raw(user_id, photoset_id):
    # for debug
    conf = stream_api.set_config(user_id, photoset_id, request.args.get("count", type=int))
    return raw_response(stream_api.get_album_photos(conf))


@app.route('/user_raw/<user_id>')
def user_raw(user_id):
    # for debug
    conf = stream_api.set_config(user_id, None, request.args.get("count", type=int))
    return raw_response(stream_api.get_user_photos(conf))


def raw_response(flickr_results):
    return jsonify({"result": result_kind(flickr_results), "response": flickr_results})


def render_stream(api_type, user_id, photoset_id=None):
    style_name = request.args.get("style", "default")
    if style_name != "default" and style_name not in image_styles.styles:
        flask.abort(404)
    conf = stream_api.set_config(user_id, photoset_id, request.args.get("count", type=int))
    if api_type == "album":
        flickr_results = stream_api.get_album_photos(conf)
    else:
        flickr_results = stream_api.get_user_photos(conf)
    build = stream_api.build_images(flickr_results, api_type, style_name)
    resp = flask.make_response(render_template(
        "stream.html",
        build=build,
        api_type=api_type,
        user_id=user_id,
        photoset_id=photoset_id,
        result=result_kind(flickr_results),
        message=flickr_results.get("message"),
    ))
    for element in build:
        apply_cache_policy(resp, element["cache"])
    return resp


def apply_cache_policy(resp, cache_policy):
    """Translate a render element's cache annotation into response headers."""
    if "session" in cache_policy["contexts"]:
        resp.vary.add("Cookie")
        resp.cache_control.private = True
    max_age = cache_policy["max_age"]
    resp.cache_control.max_age = PERMANENT_MAX_AGE if max_age == CACHE_PERMANENT else max_age
    return resp


@app.route('/externals/<filename>')
def external_image(filename):
    return send_from_directory(app.config["IMAGECACHE_DIR"], filename)


@app.route('/styles/<style_name>/externals/<filename>')
def styled_image(style_name, filename):
    try:
        path = derivative_for(style_name, filename)
    except UnknownImageStyle:
        flask.abort(404)
    if path is None:
        flask.abort(404)
    return flask.send_file(path, mimetype="image/jpeg")


@cache.memoize()
def derivative_for(style_name, filename):
    # keyed on names only; call cache.clear() after changing IMAGECACHE_DIR
    return image_styles.create_derivative(style_name, filename)


@app.route('/test')
def test():
    if app.config["FLICKR_STREAM_API_KEY"] == "NO_KEY_SET":
        return "Hasn't picked up env var"
    return "API key configured"


if __name__ == '__main__':
    app.run()
