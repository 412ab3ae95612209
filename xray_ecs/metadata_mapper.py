import json
import logging

import jsonschema

from .arn_parser import NOT_AN_ARN, compose_log_group_arn, parse_arn
from .exceptions import MetadataParseError

logger = logging.getLogger(__name__)

CLUSTER_LABEL = "com.amazonaws.ecs.cluster"
LOG_GROUP_OPTION = "awslogs-group"

# NetworkMode -> how the container identifier is read from the network entry.
NETWORK_MODE_POLICIES = {
    "awsvpc": lambda network: network.get("PrivateDNSName"),
}

# Only the keys we read are described. All are optional and null counts as absent.
SCHEMA = {
    "type": "object",
    "properties": {
        "DockerId": {"type": ["string", "null"]},
        "ContainerARN": {"type": ["string", "null"]},
        "Networks": {
            "type": ["array", "null"],
            "items": {
                "type": "object",
                "properties": {
                    "NetworkMode": {"type": ["string", "null"]},
                    "PrivateDNSName": {"type": ["string", "null"]},
                },
            },
        },
        "LogOptions": {
            "type": ["object", "null"],
            "properties": {LOG_GROUP_OPTION: {"type": ["string", "null"]}},
        },
        "Labels": {
            "type": ["object", "null"],
            "properties": {CLUSTER_LABEL: {"type": ["string", "null"]}},
        },
    },
}


def hostname_metadata(hostname):
    return {"ecs": {"container": hostname}}


def validate_schema(data):
    try:
        jsonschema.validate(instance=data, schema=SCHEMA)
    except jsonschema.exceptions.ValidationError as e:
        raise MetadataParseError(f"Container metadata validation failed: {e.message}")


def parse_ecs_metadata(data, hostname):
    container = None
    for network in data.get("Networks") or []:
        network_mode = network.get("NetworkMode")
        extract = NETWORK_MODE_POLICIES.get(network_mode)
        if extract is None:
            logger.debug(f"NetworkMode {network_mode} is not supported")
            continue
        container = extract(network)

    container_id = data.get("DockerId")
    container_arn = data.get("ContainerARN")

    if container is None or container_id is None or container_arn is None:
        logger.warning(
            "cannot get the container metadata due to: missing container_id, "
            "container or container_arn. Falling back to hostname."
        )
        return hostname_metadata(hostname)

    return {
        "ecs": {
            "container": container,
            "container_id": container_id,
            "container_arn": container_arn,
        }
    }


def parse_cloudwatch_logs_metadata(data):
    log_options = data.get("LogOptions")
    if log_options is None:
        logger.debug("log_options is not set")
        return {}

    log_group = log_options.get(LOG_GROUP_OPTION)
    if log_group is None:
        logger.debug(
            f"log_group is not set, LogOptions has keys: {sorted(log_options)}"
        )
        return {}

    labels = data.get("Labels") or {}
    cluster_arn = parse_arn(labels.get(CLUSTER_LABEL))
    if cluster_arn is NOT_AN_ARN:
        logger.debug("cluster_arn is not set")
        return {"cloudwatch_logs": {"log_group": log_group}}

    logger.debug(f"cluster_arn is set to {cluster_arn}")
    log_arn = compose_log_group_arn(cluster_arn, log_group)
    logger.debug(f"log arn calculated to be {log_arn}")

    return {"cloudwatch_logs": {"log_group": log_group, "arn": log_arn}}


def parse_metadata(json_str, hostname):
    """
    Map the container metadata document onto the `ecs` and `cloudwatch_logs`
    groups. Raises MetadataParseError when the body is not a usable JSON object.
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise MetadataParseError(f"Failed to parse container metadata: {e}")

    validate_schema(data)

    return {
        **parse_ecs_metadata(data, hostname),
        **parse_cloudwatch_logs_metadata(data),
    }
