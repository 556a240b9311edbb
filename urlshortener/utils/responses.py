"""API Gateway Lambda Proxy response builders.

Every response carries CORS headers and a JSON body. Error bodies follow the
shape {"message": "<reason>", "errorCode": "<EVENT_CODE>"}.

Example:
    >>> response_404(message="alias 'abc123' doesn't exist", error_code='ALIAS_NOT_FOUND')
    {'statusCode': 404, 'headers': {...}, 'body': '{"message": "Not Found (alias \'abc123\' doesn\'t exist)", ...}'}
"""

import json
from typing import Any

from urlshortener.types import HttpHeaders, LambdaResponse


CORS_HEADERS: HttpHeaders = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Authorization,Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET,DELETE',
}


def json_response(status_code: int, body: dict[str, Any], headers: HttpHeaders | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def _error_body(base: str, message: str | None, error_code: str | None) -> dict[str, Any]:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return body


def response_200(body: dict[str, Any]) -> LambdaResponse:
    return json_response(200, body)


def response_201(body: dict[str, Any]) -> LambdaResponse:
    return json_response(201, body)


def response_302(*, location: str) -> LambdaResponse:
    return json_response(302, {}, headers={'Location': location})


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return json_response(400, _error_body('Bad Request', message, error_code))


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return json_response(404, _error_body('Not Found', message, error_code))


def response_409(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return json_response(409, _error_body('Conflict', message, error_code))


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return json_response(500, _error_body('Internal Server Error', message, error_code))
