from typing import Any, Dict

import boto3


def get_ssm_config(
    path: str,
    region: str = "us-east-1",
    truncate_keys: bool = False,
) -> Dict[str, Any]:
    """
    Reads every decrypted parameter stored under an SSM path

    :param path: parameter path, e.g. "/prod/geocoding/google/"
    :param region: aws region
    :param truncate_keys: key the result by the name relative to path instead of the full name
    :return: parameter name -> value
    """
    ssm = boto3.client("ssm", region_name=region)
    paginator = ssm.get_paginator("get_parameters_by_path")
    params: Dict[str, Any] = {}
    for page in paginator.paginate(Path=path, Recursive=True, WithDecryption=True):
        for param in page.get("Parameters", []):
            name: str = param["Name"]
            params[name[len(path) :] if truncate_keys else name] = param["Value"]
    return params
