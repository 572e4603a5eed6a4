"""Message patterns understood by the authentication service.

Pattern format: 'service.action'. The gateway sends each message as
POST /messages/<pattern> with the message data as the JSON body.
"""

USER_REGISTER = "user.register"
USER_CREATE = "user.create"
USER_FIND_ALL = "user.findAll"
USER_FIND_BY_CREATOR = "user.findByCreator"
USER_FIND_BY_EMAIL = "user.findByEmail"
USER_FIND_BY_ID = "user.findById"
USER_UPDATE = "user.update"
USER_DELETE = "user.delete"
USER_VALIDATE = "user.validate"

HEALTH_CHECK = "health.check"
