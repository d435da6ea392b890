import boto3
import pytest
from botocore.stub import Stubber

from ebs_resize.core.aws.ec2 import EC2Manager
from ebs_resize.utils.exceptions import AwsOperationError

INSTANCE_ID = "i-0123456789abcdef0"


def instance(instance_id, name, state="running"):
    return {
        "InstanceId": instance_id,
        "State": {"Code": 16, "Name": state},
        "RootDeviceName": "/dev/sda1",
        "Placement": {"AvailabilityZone": "ap-southeast-2a"},
        "Tags": [{"Key": "Name", "Value": name}],
    }


@pytest.fixture
def manager():
    session = boto3.Session(
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        region_name="ap-southeast-2",
    )
    return EC2Manager(session, "ap-southeast-2")


@pytest.fixture
def stubber(manager):
    with Stubber(manager.ec2_client) as stub:
        yield stub
        stub.assert_no_pending_responses()


def test_find_by_name_keeps_live_exact_matches_across_pages(manager, stubber):
    name_filter = {
        "Filters": [
            {"Name": "tag:Name", "Values": ["web-?"]},
            {
                "Name": "instance-state-name",
                "Values": ["pending", "running", "stopping", "stopped"],
            },
        ]
    }
    stubber.add_response(
        "describe_instances",
        {
            "Reservations": [{"Instances": [instance(INSTANCE_ID, "web-?")]}],
            "NextToken": "page-2",
        },
        name_filter,
    )
    stubber.add_response(
        "describe_instances",
        {"Reservations": [{"Instances": [instance("i-0fffffffffffffff1", "web-1")]}]},
        dict(name_filter, NextToken="page-2"),
    )

    servers = manager.find_instances_by_name("web-?")

    assert [server.instance_id for server in servers] == [INSTANCE_ID]


def test_get_instance_returns_none_when_missing(manager, stubber):
    stubber.add_client_error(
        "describe_instances",
        service_error_code="InvalidInstanceID.NotFound",
        service_message="The instance ID does not exist",
        expected_params={"InstanceIds": [INSTANCE_ID]},
    )

    assert manager.get_instance(INSTANCE_ID) is None


def test_get_instance_propagates_other_errors(manager, stubber):
    stubber.add_client_error(
        "describe_instances",
        service_error_code="UnauthorizedOperation",
        service_message="You are not authorized",
    )

    with pytest.raises(AwsOperationError) as excinfo:
        manager.get_instance(INSTANCE_ID)

    assert excinfo.value.error_code == "UnauthorizedOperation"


def test_get_shutdown_behavior(manager, stubber):
    stubber.add_response(
        "describe_instance_attribute",
        {"InstanceId": INSTANCE_ID, "InstanceInitiatedShutdownBehavior": {"Value": "terminate"}},
        {"InstanceId": INSTANCE_ID, "Attribute": "instanceInitiatedShutdownBehavior"},
    )

    assert manager.get_shutdown_behavior(INSTANCE_ID) == "terminate"


def test_create_volume_passes_performance_settings(manager, stubber):
    stubber.add_response(
        "create_volume",
        {
            "VolumeId": "vol-0eeeeeeeeeeeeeee5",
            "Size": 40,
            "SnapshotId": "snap-0123456789abcdef0",
            "AvailabilityZone": "ap-southeast-2a",
            "State": "creating",
            "VolumeType": "gp3",
            "Iops": 3000,
            "Throughput": 125,
        },
        {
            "SnapshotId": "snap-0123456789abcdef0",
            "Size": 40,
            "AvailabilityZone": "ap-southeast-2a",
            "VolumeType": "gp3",
            "Iops": 3000,
            "Throughput": 125,
        },
    )

    volume = manager.create_volume(
        "snap-0123456789abcdef0", 40, "ap-southeast-2a", "gp3", iops=3000, throughput=125
    )

    assert volume.volume_id == "vol-0eeeeeeeeeeeeeee5"
    assert volume.state == "creating"


def test_create_volume_omits_unset_performance_settings(manager, stubber):
    stubber.add_response(
        "create_volume",
        {"VolumeId": "vol-0eeeeeeeeeeeeeee5", "Size": 16, "State": "creating"},
        {
            "SnapshotId": "snap-0123456789abcdef0",
            "Size": 16,
            "AvailabilityZone": "ap-southeast-2a",
            "VolumeType": "gp2",
        },
    )

    manager.create_volume("snap-0123456789abcdef0", 16, "ap-southeast-2a", "gp2")


def test_client_error_is_wrapped(manager, stubber):
    stubber.add_client_error(
        "detach_volume",
        service_error_code="IncorrectState",
        service_message="Volume is in the available state",
    )

    with pytest.raises(AwsOperationError) as excinfo:
        manager.detach_volume("vol-0aaaaaaaaaaaaaaa1", INSTANCE_ID, "/dev/sda1")

    error = excinfo.value
    assert error.operation == "detach_volume"
    assert error.error_code == "IncorrectState"
    assert error.resource_id == "vol-0aaaaaaaaaaaaaaa1"
    assert "detach_volume failed (IncorrectState)" in str(error)


def test_snapshot_is_created_with_description(manager, stubber):
    stubber.add_response(
        "create_snapshot",
        {
            "SnapshotId": "snap-0123456789abcdef0",
            "VolumeId": "vol-0aaaaaaaaaaaaaaa1",
            "State": "pending",
            "Progress": "",
            "VolumeSize": 20,
        },
        {"VolumeId": "vol-0aaaaaaaaaaaaaaa1", "Description": "web-1 resize"},
    )

    snapshot = manager.create_snapshot("vol-0aaaaaaaaaaaaaaa1", "web-1 resize")

    assert snapshot.snapshot_id == "snap-0123456789abcdef0"
    assert not snapshot.is_completed


def test_volume_attachment_state_is_read(manager, stubber):
    stubber.add_response(
        "describe_volumes",
        {
            "Volumes": [
                {
                    "VolumeId": "vol-0aaaaaaaaaaaaaaa1",
                    "Size": 20,
                    "State": "in-use",
                    "Attachments": [
                        {
                            "Device": "/dev/sda1",
                            "InstanceId": INSTANCE_ID,
                            "State": "detaching",
                            "VolumeId": "vol-0aaaaaaaaaaaaaaa1",
                        }
                    ],
                }
            ]
        },
        {"VolumeIds": ["vol-0aaaaaaaaaaaaaaa1"]},
    )

    assert manager.get_volume("vol-0aaaaaaaaaaaaaaa1").attachment_state == "detaching"


def test_empty_tags_make_no_call(manager, stubber):
    manager.create_tags("vol-0aaaaaaaaaaaaaaa1", {})


def test_tags_are_sent_as_key_value_pairs(manager, stubber):
    stubber.add_response(
        "create_tags",
        {},
        {"Resources": ["snap-1"], "Tags": [{"Key": "Name", "Value": "snap-vol-1"}]},
    )

    manager.create_tags("snap-1", {"Name": "snap-vol-1"})
