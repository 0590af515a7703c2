"""
Flask Web App for the Chinese Address Parser
JSON API over the shared AddressParser
"""
import logging

from flask import Flask, request, jsonify

from cpca import __version__
from cpca.parser import get_parser
from cpca.pipeline import AddressPipeline

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.json.ensure_ascii = False

# Upper bound on addresses per /parse_batch request
MAX_BATCH_SIZE = 1000


def _json_body():
    """Request JSON object, or None when the body is missing or not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _text(data, key):
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ''


def _error(message, status=400):
    return jsonify({
        'success': False,
        'error': message
    }), status


# ============================================================================
# ROUTES
# ============================================================================

@app.route('/')
def index():
    """Service info"""
    return jsonify({
        'success': True,
        'service': 'cpca',
        'version': __version__,
        'stats': get_parser().get_stats(),
        'endpoints': ['/parse', '/parse_batch', '/normalize', '/provinces', '/cities', '/districts']
    })


@app.route('/parse', methods=['POST'])
def parse():
    """API endpoint to parse one address"""
    data = _json_body()
    if data is None:
        return _error('Request body must be a JSON object')

    address = data.get('address')
    if not isinstance(address, str) or not address.strip():
        return _error('Address must not be empty')

    result = AddressPipeline(get_parser()).process(address)
    if result['status'] == 'error':
        logger.error(f"Parse failed for {address!r}: {result['final_output']['error']}")
        return _error(result['final_output']['error'], 500)

    return jsonify({
        'success': True,
        'data': result['final_output'],
        'quality_flag': result['quality_flag'],
        'metadata': {
            'status': result['status'],
            'total_time_ms': result['total_time_ms']
        }
    })


@app.route('/parse_batch', methods=['POST'])
def parse_batch():
    """API endpoint to parse a list of addresses, preserving order"""
    data = _json_body()
    if data is None:
        return _error('Request body must be a JSON object')

    addresses = data.get('addresses')
    if not isinstance(addresses, list) or not all(isinstance(a, str) for a in addresses):
        return _error('addresses must be a list of strings')
    if len(addresses) > MAX_BATCH_SIZE:
        return _error(f'At most {MAX_BATCH_SIZE} addresses per request')

    pipeline = AddressPipeline(get_parser())
    results = pipeline.process_batch(addresses)

    return jsonify({
        'success': True,
        'results': [
            {
                'address': result['raw_input'],
                'data': result['final_output'],
                'quality_flag': result['quality_flag']
            }
            for result in results
        ],
        'stats': pipeline.get_stats()
    })


@app.route('/normalize', methods=['POST'])
def normalize():
    """API endpoint to expand abbreviated province/city/district names"""
    data = _json_body()
    if data is None:
        return _error('Request body must be a JSON object')

    province = _text(data, 'province')
    city = _text(data, 'city')
    district = _text(data, 'district') or None

    if not province or not city:
        return _error('province and city are required')

    return jsonify({
        'success': True,
        'normalized': get_parser().normalize(province, city, district)
    })


@app.route('/provinces')
def get_provinces():
    """API endpoint to list province-level names"""
    return jsonify({
        'success': True,
        'provinces': sorted(get_parser().provinces())
    })


@app.route('/cities')
def get_cities():
    """API endpoint to list cities of a province"""
    province = request.args.get('province', '').strip()
    if not province:
        return _error('province parameter is required')

    return jsonify({
        'success': True,
        'province': province,
        'cities': sorted(get_parser().cities_of_province(province))
    })


@app.route('/districts')
def get_districts():
    """API endpoint to list districts of a city"""
    city = request.args.get('city', '').strip()
    if not city:
        return _error('city parameter is required')

    return jsonify({
        'success': True,
        'city': city,
        'districts': sorted(get_parser().districts_of_city(city))
    })


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(levelname)s - %(message)s')
    app.run(debug=True, host='0.0.0.0', port=9797)
