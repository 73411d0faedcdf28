"""
ProjectHub Backend — Services Layer
====================================

What:  Data-access layer sitting between routes (HTTP) and MongoDB.
How:   Services accept validated values and the database handle, perform
       the document operations and return plain records. Ownership rules
       (only the owner updates/deletes) are enforced here.

Service Inventory:
    - ProjectService:  create/list/fetch/update/delete projects, like/unlike
    - CommentService:  create/list/delete comments
    - BookmarkService: add/remove bookmarks
    - UserService:     signup, login, profile lookup and update
    - base:            driver-error translation, membership-array updates
"""
