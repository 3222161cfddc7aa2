def _iso(value):
    return value.isoformat() if value else None


def _money(value):
    return float(value or 0)


def user_to_dict(u):
    return {
        "id": u.id,
        "name": u.name,
        "email": u.email,
        "role": u.role,
        "createdAt": _iso(u.created_at),
    }


def unit_to_dict(u, with_location=False):
    payload = {
        "id": u.id,
        "floorId": u.floor_id,
        "number": u.number,
        "type": u.type,
        "status": u.status,
        "rent": _money(u.rent),
    }
    if with_location:
        floor = u.floor
        prop = floor.property if floor else None
        payload["floor"] = {
            "id": floor.id,
            "name": floor.name,
            "property": {
                "id": prop.id,
                "name": prop.name,
                "location": prop.location,
            } if prop else None,
        } if floor else None
    return payload


def property_to_dict(p):
    return {
        "id": p.id,
        "name": p.name,
        "location": p.location,
        "type": p.type,
        "image": p.image,
        "floors": [{
            "id": f.id,
            "name": f.name,
            "units": [unit_to_dict(u) for u in f.units],
        } for f in p.floors],
    }


def tenant_to_dict(t):
    return {
        "id": t.id,
        "name": t.name,
        "email": t.email,
        "phone": t.phone,
        "moveInDate": _iso(t.move_in_date),
        "leaseEnd": _iso(t.lease_end),
        "status": t.status,
        "unitId": t.unit_id,
        "userId": t.user_id,
        "unit": unit_to_dict(t.unit, with_location=True) if t.unit else None,
    }


def payment_to_dict(p):
    return {
        "id": p.id,
        "tenantId": p.tenant_id,
        "unitId": p.unit_id,
        "month": p.month,
        "year": p.year,
        "amount": _money(p.amount),
        "status": p.status,
        "dueDate": _iso(p.due_date),
        "date": _iso(p.date),
        "method": p.method,
        "reference": p.reference,
        "tenant": {"id": p.tenant.id, "name": p.tenant.name} if p.tenant else None,
        "unit": unit_to_dict(p.unit, with_location=True) if p.unit else None,
    }


def request_to_dict(r):
    return {
        "id": r.id,
        "title": r.title,
        "description": r.description,
        "priority": r.priority,
        "status": r.status,
        "dateReported": _iso(r.date_reported),
        "unitId": r.unit_id,
        "tenantId": r.tenant_id,
        "unit": unit_to_dict(r.unit, with_location=True) if r.unit else None,
        "tenant": {"id": r.tenant.id, "name": r.tenant.name} if r.tenant else None,
    }
