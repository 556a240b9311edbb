import json

import pytest

from urlshortener.utils.responses import (
    CORS_HEADERS,
    json_response,
    response_200,
    response_201,
    response_302,
    response_400,
    response_404,
    response_409,
    response_500,
)


def test_json_response():
    response = json_response(200, {'alias': 'abc123'}, headers={'X-Request-Id': 'req-1'})

    assert response['statusCode'] == 200
    assert response['headers'] == {'Content-Type': 'application/json', **CORS_HEADERS, 'X-Request-Id': 'req-1'}
    assert json.loads(response['body']) == {'alias': 'abc123'}


@pytest.mark.parametrize('builder, status_code', [(response_200, 200), (response_201, 201)])
def test_success_responses(builder, status_code):
    response = builder({'alias': 'abc123', 'id': 1})

    assert response['statusCode'] == status_code
    assert json.loads(response['body']) == {'alias': 'abc123', 'id': 1}


def test_response_302():
    response = response_302(location='https://example.com/page')

    assert response['statusCode'] == 302
    assert response['headers']['Location'] == 'https://example.com/page'
    assert json.loads(response['body']) == {}


@pytest.mark.parametrize(
    'builder, status_code, base',
    [
        (response_400, 400, 'Bad Request'),
        (response_404, 404, 'Not Found'),
        (response_409, 409, 'Conflict'),
        (response_500, 500, 'Internal Server Error'),
    ],
)
def test_error_responses(builder, status_code, base):
    response = builder(message='details', error_code='SOME_ERROR')

    assert response['statusCode'] == status_code
    assert response['headers']['Access-Control-Allow-Origin'] == '*'
    assert json.loads(response['body']) == {'message': f'{base} (details)', 'errorCode': 'SOME_ERROR'}


def test_error_response_without_details():
    assert json.loads(response_500()['body']) == {'message': 'Internal Server Error'}
