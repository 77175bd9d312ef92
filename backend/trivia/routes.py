from flask import Blueprint, jsonify, current_app

main = Blueprint('main', __name__)

# Methods Flask adds to every rule
_IMPLICIT_METHODS = {'HEAD', 'OPTIONS'}


@main.route('/')
def index():
    """List every route and the methods it accepts."""
    by_path = {}
    for rule in current_app.url_map.iter_rules():
        if rule.endpoint == 'static':
            continue
        methods = by_path.setdefault(rule.rule, set())
        methods.update(rule.methods - _IMPLICIT_METHODS)
    return jsonify([
        {'path': path, 'methods': sorted(methods)}
        for path, methods in sorted(by_path.items())
    ])
